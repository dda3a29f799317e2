"""
Self-contained tree walking with pattern-based exclusion, concatenating
included files into a single labeled document.

No imports from `copycat` outside this package.

Usage::

    from pathlib import Path

    from copycat.file_walker import TreeWalker, WalkerConfig, classify

    config = WalkerConfig(patterns=classify(["*.lock", "/build"]), ignore_hidden=True)
    with open("out.md", "w", encoding="utf-8") as out:
        result = TreeWalker(config).walk(Path("."), out)
"""

from copycat.file_walker.defaults import DEFAULT_EXCLUDES, FILE_LIMIT, NON_TEXT_PLACEHOLDER
from copycat.file_walker.patterns import InvalidPatternError, classify, is_excluded, matches
from copycat.file_walker.types import ExcludePattern, PatternKind, WalkerConfig, WalkResult
from copycat.file_walker.walker import TreeWalker

__all__ = [
    "DEFAULT_EXCLUDES",
    "FILE_LIMIT",
    "NON_TEXT_PLACEHOLDER",
    "ExcludePattern",
    "InvalidPatternError",
    "PatternKind",
    "TreeWalker",
    "WalkResult",
    "WalkerConfig",
    "classify",
    "is_excluded",
    "matches",
]
