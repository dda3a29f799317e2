"""Code fence labels derived from file extensions."""

from __future__ import annotations

from pathlib import Path

PLAINTEXT_LABEL = "plaintext"

# Extension (without the dot, case-sensitive) -> fence label.
# Unmapped extensions are used as the label verbatim.
_LABELS: dict[str, str] = {
    "rs": "rust",
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "html": "html",
    "css": "css",
    "java": "java",
    "c": "c",
    "cpp": "cpp",
    "cs": "csharp",
    "sh": "bash",
    "json": "json",
    "rb": "ruby",
    "go": "go",
    "yml": "yaml",
    "yaml": "yaml",
    "toml": "toml",
    "md": "markdown",
}


def code_block_label(extension: str) -> str:
    return _LABELS.get(extension, extension)


def label_for_path(path: Path) -> str:
    """Label for a file, or `plaintext` if it has no extension."""
    extension = path.suffix[1:]
    if not extension:
        return PLAINTEXT_LABEL
    return code_block_label(extension)
