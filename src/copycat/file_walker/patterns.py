"""
Pattern classification and the exclusion decision.

Raw pattern strings (from config and `.gitignore`) are classified once into
`ExcludePattern`s. Each entry met during the walk is then checked against the
whole table: any match excludes it.

Glob matching uses `fnmatch` rules, case-sensitive: `*` matches any run of
characters including `/`, `?` matches one character, and `[...]` / `[!...]`
are character classes. A whole `**/` component matches zero or more leading
directories, so `**/build` also matches a top-level `build`. A pattern that
fails to compile is treated as matching nothing (fail-open), so a bad pattern
can only cause over-inclusion.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable
from functools import lru_cache

from copycat.file_walker.types import ExcludePattern, PatternKind

log = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?")


class InvalidPatternError(ValueError):
    """A glob pattern that cannot be compiled."""


def classify(raw_patterns: Iterable[str]) -> tuple[ExcludePattern, ...]:
    """
    Classify raw pattern strings into a decision table.

    A pattern is a glob if it contains `*` or `?`, and is path-anchored if it
    contains `/` anywhere (which includes a trailing `/`).
    """
    table: list[ExcludePattern] = []
    for raw in raw_patterns:
        is_glob = any(c in raw for c in _GLOB_CHARS)
        is_path_anchored = "/" in raw or raw.endswith("/")
        table.append(ExcludePattern(raw, PatternKind.from_flags(is_glob, is_path_anchored)))
    return tuple(table)


def _check_glob_syntax(pattern: str) -> None:
    i = 0
    while i < len(pattern):
        if pattern[i] == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] == "!":
                j += 1
            # A `]` right after the opening bracket is a literal member.
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise InvalidPatternError(f"Unterminated character class in pattern: {pattern!r}")
            i = close + 1
        else:
            i += 1

    for component in pattern.split("/"):
        if "**" in component and component != "**":
            raise InvalidPatternError(
                f"`**` must be a whole path component in pattern: {pattern!r}"
            )


_TRANSLATED = re.compile(r"\(\?s:(?P<body>.*)\)\\[Zz]", re.DOTALL)


def _translate_body(component: str) -> str:
    """`fnmatch.translate` output for one component, without its anchoring wrapper."""
    m = _TRANSLATED.fullmatch(fnmatch.translate(component))
    if m is None:
        raise InvalidPatternError(f"Cannot translate glob component: {component!r}")
    return m.group("body")


def compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Compile a glob pattern to a regular expression.

    Raises `InvalidPatternError` for an unterminated `[` class, or for `**`
    combined with other characters in one path component (this includes
    runs of three or more `*`). A `**` component followed by `/` matches
    zero or more directories; a trailing `**` matches everything below.
    """
    _check_glob_syntax(pattern)
    components = pattern.split("/")
    if "**" not in components:
        return re.compile(fnmatch.translate(pattern))

    parts: list[str] = []
    for i, component in enumerate(components):
        last = i == len(components) - 1
        if component == "**":
            parts.append(".*" if last else "(?:.*/)?")
        else:
            parts.append(_translate_body(component) + ("" if last else "/"))
    return re.compile(f"(?s:{''.join(parts)})\\Z")


@lru_cache(maxsize=None)
def _compiled_or_none(pattern: str) -> re.Pattern[str] | None:
    # Cached, so each bad pattern is reported once per process.
    try:
        return compile_glob(pattern)
    except InvalidPatternError as e:
        log.warning("Ignoring invalid exclude pattern: %s", e)
        return None


def _glob_matches(pattern: str, candidate: str) -> bool:
    regex = _compiled_or_none(pattern)
    return regex is not None and regex.match(candidate) is not None


def matches(pattern: ExcludePattern, relative_path: str, filename: str) -> bool:
    """
    Check a single pattern against an entry.

    `relative_path` uses `/` separators and is relative to the walk root;
    `filename` is the entry's bare name.

    Anchored literal patterns are a plain string prefix test on the relative
    path, so `/build` excludes `build/obj/a.o` (and also `build2/...`), but not
    `src/build/...`.
    """
    normalized = pattern.normalized
    kind = pattern.kind
    if kind is PatternKind.PATH_GLOB:
        return _glob_matches(normalized, relative_path)
    if kind is PatternKind.PATH_LITERAL:
        return relative_path == normalized or relative_path.startswith(normalized.rstrip("/"))
    if kind is PatternKind.FILENAME_GLOB:
        return _glob_matches(normalized, filename)
    return filename == normalized


def is_excluded(patterns: Iterable[ExcludePattern], relative_path: str, filename: str) -> bool:
    """True if any pattern in the table matches the entry."""
    return any(matches(p, relative_path, filename) for p in patterns)
