from __future__ import annotations

import re
from typing import Tuple

from core.errors import ValidationError
from core.paths import normalize_posix_relpath


_REPOSITORY_RE = re.compile(r"^([^/\s]+)/([^/\s]+)$")


def parse_repository(repository: str) -> Tuple[str, str]:
    """Split an ``owner/repo`` identifier into its two segments."""
    raw = (repository or "").strip()
    m = _REPOSITORY_RE.match(raw)
    if not m:
        raise ValidationError(f"Invalid repository format: {raw!r}. Expected format: owner/repo")
    return m.group(1), m.group(2)


def normalize_ref(ref: str) -> str:
    ref_clean = (ref or "main").strip()
    if not ref_clean:
        raise ValidationError("branch must be non-empty")
    return ref_clean


def normalize_path(path: str) -> str:
    # Keep GitHub paths stable and OS-independent:
    # - Convert "\" to "/"
    # - Drop leading "/" and repeated "./"
    # - Empty means repository root
    return normalize_posix_relpath(path).rstrip("/")
