"""
TreeWalker: depth-first, pre-order walk that emits included files into
the output document until the file limit is reached.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from copycat.file_walker.emit import display_path, emit_file, relative_posix
from copycat.file_walker.patterns import is_excluded
from copycat.file_walker.types import WalkerConfig, WalkResult

log = logging.getLogger(__name__)


@dataclass
class _WalkState:
    """Traversal context owned by a single `walk()` call."""

    root: Path
    output: TextIO | None
    result: WalkResult = field(default_factory=WalkResult)


class TreeWalker:
    """
    Walks a directory tree and concatenates included files.

    At each entry the hidden-file rule is applied first, then the decision
    table. Excluded directories are pruned entirely. Entries are visited in
    name order so repeated runs over the same tree produce the same document.
    """

    def __init__(self, config: WalkerConfig) -> None:
        self._config: WalkerConfig = config
        self._skip_paths: frozenset[Path] = frozenset(p.resolve() for p in config.skip_paths)

    def walk(self, root: Path, output: TextIO) -> WalkResult:
        """
        Walk `root`, emitting included files into `output`. Stops silently
        once `limit` files are emitted. `OSError`s from listing a directory
        or writing to `output` propagate.
        """
        state = _WalkState(root=root, output=output)
        self._visit_dir(root, state)
        return state.result

    def list_files(self, root: Path) -> list[str]:
        """Relative paths a walk would emit, without reading or writing any file."""
        state = _WalkState(root=root, output=None)
        self._visit_dir(root, state)
        return state.result.emitted

    def should_exclude(self, relative_path: str, filename: str) -> bool:
        """Hidden-file rule first, then any matching pattern."""
        if self._config.ignore_hidden and filename.startswith("."):
            return True
        return is_excluded(self._config.patterns, relative_path, filename)

    def _limit_reached(self, state: _WalkState) -> bool:
        return state.result.count >= self._config.limit

    def _visit_dir(self, directory: Path, state: _WalkState) -> None:
        if self._limit_reached(state):
            return

        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            if self._limit_reached(state):
                return

            path = Path(entry.path)
            rel = relative_posix(path, state.root)
            shown = display_path(str(path))
            is_dir = entry.is_dir()

            if self.should_exclude(rel, entry.name):
                log.info("Skipping %s: %s", "directory" if is_dir else "file", shown)
                state.result.skipped += 1
            elif is_dir:
                log.info("Entering directory: %s", shown)
                self._visit_dir(path, state)
            elif path.resolve() in self._skip_paths:
                log.info("Skipping file: %s", shown)
                state.result.skipped += 1
            else:
                log.info("Including file: %s", shown)
                if state.output is not None:
                    emit_file(path, state.root, state.output)
                state.result.emitted.append(rel)
