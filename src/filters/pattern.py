"""Structural filters: file name, included path and excluded path.

These never touch file contents, so the chain runs them first to shrink
the candidate set before any read happens.
"""

from __future__ import annotations

import fnmatch
from typing import List, Sequence, TypeVar

from core.paths import PatternInput, as_patterns, contains_wildcard, glob_match, normalize_posix_relpath

T = TypeVar("T")


def path_matches(rel_path: str, pattern: str) -> bool:
    """Match a relative path against a path pattern.

    Wildcard patterns are globs ('**' aware, or fnmatch over the whole
    path); plain patterns match when contained in the path.
    """
    path = normalize_posix_relpath(rel_path)
    pat = normalize_posix_relpath(pattern)
    if not pat:
        return False
    if contains_wildcard(pat):
        return glob_match(path, pat) or fnmatch.fnmatchcase(path, pat)
    return pat.rstrip("/") in path


class FilePatternFilter:
    def __init__(self, patterns: PatternInput, *, case_sensitive: bool = True) -> None:
        self._patterns = as_patterns(patterns)
        self._case_sensitive = case_sensitive

    def _matches(self, name: str) -> bool:
        if self._case_sensitive:
            return any(fnmatch.fnmatchcase(name, p) for p in self._patterns)
        lowered = name.lower()
        return any(fnmatch.fnmatchcase(lowered, p.lower()) for p in self._patterns)

    def apply(self, items: Sequence[T]) -> List[T]:
        if not self._patterns:
            return list(items)
        return [item for item in items if self._matches(item.name)]


class PathFilter:
    def __init__(self, patterns: PatternInput) -> None:
        self._patterns = as_patterns(patterns)

    def apply(self, items: Sequence[T]) -> List[T]:
        if not self._patterns:
            return list(items)
        return [
            item for item in items
            if any(path_matches(item.relative_path, p) for p in self._patterns)
        ]


class ExcludePathFilter:
    def __init__(self, patterns: PatternInput) -> None:
        self._patterns = as_patterns(patterns)

    def apply(self, items: Sequence[T]) -> List[T]:
        if not self._patterns:
            return list(items)
        return [
            item for item in items
            if not any(path_matches(item.relative_path, p) for p in self._patterns)
        ]
