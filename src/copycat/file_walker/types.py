"""Types shared by the pattern classifier and the tree walker."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from copycat.file_walker.defaults import FILE_LIMIT


class PatternKind(Enum):
    """
    How an exclusion pattern is matched. Patterns are either literal or glob,
    and either matched against the bare filename or anchored to the path
    relative to the walk root.
    """

    FILENAME_LITERAL = "filename_literal"
    FILENAME_GLOB = "filename_glob"
    PATH_LITERAL = "path_literal"
    PATH_GLOB = "path_glob"

    @classmethod
    def from_flags(cls, is_glob: bool, is_path_anchored: bool) -> PatternKind:
        if is_path_anchored:
            return cls.PATH_GLOB if is_glob else cls.PATH_LITERAL
        return cls.FILENAME_GLOB if is_glob else cls.FILENAME_LITERAL


@dataclass(frozen=True)
class ExcludePattern:
    """A classified exclusion pattern."""

    raw: str
    kind: PatternKind

    @property
    def is_glob(self) -> bool:
        return self.kind in (PatternKind.FILENAME_GLOB, PatternKind.PATH_GLOB)

    @property
    def is_path_anchored(self) -> bool:
        return self.kind in (PatternKind.PATH_LITERAL, PatternKind.PATH_GLOB)

    @property
    def normalized(self) -> str:
        """The pattern with one leading `/` removed (`/build` and `build` anchor alike)."""
        return self.raw[1:] if self.raw.startswith("/") else self.raw


@dataclass
class WalkerConfig:
    """
    Configuration for a single tree walk.

    `patterns` is the decision table from `classify()`. `skip_paths` holds
    absolute paths that are never emitted (typically the output document).
    """

    patterns: tuple[ExcludePattern, ...] = ()
    ignore_hidden: bool = True
    limit: int = FILE_LIMIT
    skip_paths: frozenset[Path] = field(default_factory=frozenset)


@dataclass
class WalkResult:
    """What a walk emitted, as paths relative to the root, plus the skip count."""

    emitted: list[str] = field(default_factory=list)
    skipped: int = 0

    @property
    def count(self) -> int:
        return len(self.emitted)
