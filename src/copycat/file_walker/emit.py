"""Writing labeled file blocks into the output document."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from pathspec.util import normalize_file

from copycat.file_walker.defaults import NON_TEXT_PLACEHOLDER
from copycat.file_walker.labels import label_for_path

log = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Project"


def relative_posix(path: Path, root: Path) -> str:
    """Path relative to `root` with `/` separators, or `path` itself if not under `root`."""
    try:
        rel = path.relative_to(root)
    except ValueError:
        rel = path
    return normalize_file(rel)


def display_path(path: str) -> str:
    """
    Printable form of a path string. Bytes of a non-UTF-8 file name, which
    `os` decodes to lone surrogates, become U+FFFD.
    """
    return path.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def project_name(root: Path) -> str:
    """Project name for the document heading: the root's base name."""
    return display_path(root.name) or DEFAULT_PROJECT_NAME


def write_heading(name: str, output: TextIO) -> None:
    output.write(f"# {name} codebase\n\n")


def _read_text(path: Path) -> str | None:
    """
    Read a file as strict UTF-8 without newline translation. Returns `None`
    if the content is not valid UTF-8 or the file cannot be read.
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError:
        return None
    except OSError as e:
        log.warning("Could not read %s: %s", display_path(str(path)), e)
        return None


def emit_file(path: Path, root: Path, output: TextIO) -> None:
    """
    Write one block for `path`: a header with its path relative to `root`,
    then its content in a code fence labeled by extension. Content that is not
    valid text is replaced by a placeholder. Write errors propagate.
    """
    output.write(f"--- {display_path(relative_posix(path, root))} ---\n\n")
    output.write(f"```{label_for_path(path)}\n")
    content = _read_text(path)
    output.write(f"{NON_TEXT_PLACEHOLDER if content is None else content}\n")
    output.write("```\n\n")
