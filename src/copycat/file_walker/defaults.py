"""
Default exclusion patterns and limits for the tree walk.

Patterns here use copycat's own matching rules (see `patterns.py`), not full
gitignore semantics.
"""

from __future__ import annotations

# Lockfiles and Markdown (which includes the generated document itself).
DEFAULT_EXCLUDES: list[str] = ["*.lock", "*.md"]

# Maximum number of files emitted into one document.
FILE_LIMIT = 100

# Written inside the fence in place of content that is not valid UTF-8.
NON_TEXT_PLACEHOLDER = "<file content not valid UTF-8>"
