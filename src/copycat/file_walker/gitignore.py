"""Reading `.gitignore` patterns and adding entries to it."""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)

GITIGNORE_NAME = ".gitignore"


def _is_pattern_line(line: str) -> bool:
    return bool(line.strip()) and not line.startswith("#")


def _read_lines(gitignore: Path) -> list[str]:
    """
    Lines of `gitignore` decoded as UTF-8. A line that is not valid UTF-8 is
    dropped with a warning; the other lines are still used.
    """
    lines = []
    for number, raw in enumerate(gitignore.read_bytes().splitlines(), start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError:
            log.warning("Ignoring line %d of %s: not valid UTF-8", number, gitignore)
    return lines


def load_gitignore_patterns(directory: Path) -> list[str]:
    """
    Read `.gitignore` in `directory` and return its pattern lines, dropping
    blank lines and `#` comments. A missing file yields no patterns.
    """
    gitignore = directory / GITIGNORE_NAME
    if not gitignore.is_file():
        return []
    return [line.rstrip() for line in _read_lines(gitignore) if _is_pattern_line(line)]


def has_ignore_entry(directory: Path, entry: str) -> bool:
    """True if `.gitignore` in `directory` has a line equal to `entry` (ignoring whitespace)."""
    gitignore = directory / GITIGNORE_NAME
    if not gitignore.is_file():
        return False
    return any(line.strip() == entry for line in _read_lines(gitignore))


def append_ignore_entry(directory: Path, entry: str) -> None:
    """Append `entry` as a new line to `.gitignore`, starting a new line if needed."""
    gitignore = directory / GITIGNORE_NAME
    existing = gitignore.read_bytes() if gitignore.is_file() else b""
    prefix = "" if not existing or existing.endswith(b"\n") else "\n"
    with gitignore.open("a", encoding="utf-8") as f:
        f.write(f"{prefix}{entry}\n")
