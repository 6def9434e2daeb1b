from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from core.errors import AccessDeniedError, ValidationError

"""
Path utilities used across the project.

Provides consistent POSIX-style normalization, pattern list coercion and a
component-wise '**' supporting glob matcher used by finders and filters.
"""

PatternInput = Union[None, str, Iterable[str]]

_WILDCARD_CHARS = ("*", "?", "[", "{")


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Prevent accidental absolute paths.
    while s.startswith("./"):       # Drop repeated "./" prefixes.
        s = s[2:]
    return s


def split_posix(p: str) -> Tuple[str, ...]:
    """Split a POSIX path into non-empty segments."""
    s = (p or "").strip().replace("\\", "/").strip("/")
    if not s:
        return tuple()
    return tuple(seg for seg in s.split("/") if seg)


def contains_wildcard(p: str) -> bool:
    """Return True when a path holds glob characters."""
    return any(ch in (p or "") for ch in _WILDCARD_CHARS)


def as_patterns(value: PatternInput) -> Tuple[str, ...]:
    """Coerce None, a single pattern or a list of patterns to a tuple.

    Blank entries are dropped so an empty result always means
    "no constraint".
    """
    if value is None:
        return tuple()
    if isinstance(value, str):
        value = [value]
    return tuple(v for v in (str(x).strip() for x in value) if v)


def optional_patterns(value: PatternInput) -> Optional[Tuple[str, ...]]:
    pats = as_patterns(value)
    return pats or None


def glob_match(rel_path: str, pattern: str) -> bool:
    """Match a relative path against a glob pattern with '**' support."""
    parts = split_posix(rel_path)

    pat = (pattern or "").strip().replace("\\", "/").strip("/")
    if not pat:
        pat = "**/*"  # Default: match everything.
    pats = split_posix(pat)

    def rec(i: int, j: int) -> bool:
        if j == len(pats):
            return i == len(parts)

        token = pats[j]
        if token == "**":
            return rec(i, j + 1) or (i < len(parts) and rec(i + 1, j))

        return (
            i < len(parts)
            and fnmatch.fnmatchcase(parts[i], token)
            and rec(i + 1, j + 1)
        )

    return rec(0, 0)


def is_within(root: str, path: str) -> bool:
    """Return True when `path` resolves (symlinks included) inside `root`."""
    real_root = os.path.realpath(root)
    real = os.path.realpath(path)
    try:
        return os.path.commonpath([real_root, real]) == real_root
    except ValueError:
        # Different drives on Windows
        return False


def resolve_under_root(project_root: Path, rel_path: str) -> Path:
    raw = (rel_path or "").strip()
    if not raw:
        raise ValidationError("Path is empty")

    root = project_root.resolve()
    p = (root / raw).resolve()

    # Strong containment check to prevent directory traversal/outside access
    try:
        p.relative_to(root)
    except ValueError as e:
        raise AccessDeniedError("Access outside project root is not allowed") from e

    return p
