"""Tests for file emission and code block labels."""

from __future__ import annotations

import io
from pathlib import Path

from copycat.file_walker import NON_TEXT_PLACEHOLDER
from copycat.file_walker.emit import (
    display_path,
    emit_file,
    project_name,
    relative_posix,
    write_heading,
)
from copycat.file_walker.labels import code_block_label, label_for_path


def test_code_block_label_mapped() -> None:
    assert code_block_label("rs") == "rust"
    assert code_block_label("py") == "python"
    assert code_block_label("cs") == "csharp"
    assert code_block_label("sh") == "bash"


def test_code_block_label_passthrough() -> None:
    assert code_block_label("zig") == "zig"
    # Lookup is case-sensitive.
    assert code_block_label("RS") == "RS"


def test_label_for_path() -> None:
    """Labels come from the last extension; no extension gives plaintext."""
    assert label_for_path(Path("src/main.rs")) == "rust"
    assert label_for_path(Path("archive.tar.gz")) == "gz"
    assert label_for_path(Path("Makefile")) == "plaintext"
    assert label_for_path(Path(".bashrc")) == "plaintext"


def test_project_name() -> None:
    assert project_name(Path("/home/me/myproj")) == "myproj"
    assert project_name(Path("/")) == "Project"


def test_write_heading() -> None:
    out = io.StringIO()
    write_heading("demo", out)
    assert out.getvalue() == "# demo codebase\n\n"


def test_relative_posix(tmp_path: Path) -> None:
    assert relative_posix(tmp_path / "a" / "b.py", tmp_path) == "a/b.py"


def test_emit_file_text(tmp_path: Path) -> None:
    """A text file is written as a header plus a labeled fence."""
    src = tmp_path / "src"
    src.mkdir()
    f = src / "app.js"
    f.write_text("console.log(1);\n")

    out = io.StringIO()
    emit_file(f, tmp_path, out)
    assert out.getvalue() == "--- src/app.js ---\n\n```javascript\nconsole.log(1);\n\n```\n\n"


def test_emit_file_no_extension(tmp_path: Path) -> None:
    f = tmp_path / "Dockerfile"
    f.write_text("FROM python")

    out = io.StringIO()
    emit_file(f, tmp_path, out)
    assert out.getvalue() == "--- Dockerfile ---\n\n```plaintext\nFROM python\n```\n\n"


def test_emit_file_invalid_utf8(tmp_path: Path) -> None:
    """Content that is not UTF-8 is replaced by the placeholder."""
    f = tmp_path / "image.png"
    f.write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")

    out = io.StringIO()
    emit_file(f, tmp_path, out)
    assert out.getvalue() == f"--- image.png ---\n\n```png\n{NON_TEXT_PLACEHOLDER}\n```\n\n"


def test_emit_file_empty(tmp_path: Path) -> None:
    f = tmp_path / "empty.py"
    f.write_text("")

    out = io.StringIO()
    emit_file(f, tmp_path, out)
    assert out.getvalue() == "--- empty.py ---\n\n```python\n\n```\n\n"


def test_display_path() -> None:
    assert display_path("src/main.rs") == "src/main.rs"
    assert display_path("café.py") == "café.py"
    # Undecodable bytes arrive from `os` as lone surrogates.
    assert display_path("bad\udcff.py") == "bad\ufffd.py"


def test_emit_file_non_utf8_name(tmp_path: Path) -> None:
    f = tmp_path / "bad\udcff.txt"
    f.write_text("hello")

    out = io.StringIO()
    emit_file(f, tmp_path, out)
    assert out.getvalue() == "--- bad\ufffd.txt ---\n\n```txt\nhello\n```\n\n"
    # The header must survive a strict UTF-8 encode, as in the output file.
    out.getvalue().encode("utf-8")
