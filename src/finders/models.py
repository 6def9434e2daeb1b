"""Discovery result types shared by the local and GitHub finders."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple


@dataclass(frozen=True)
class DiscoveredItem:
    """One candidate entry found during discovery.

    Content is not read at discovery time: ``reader`` is a zero-argument
    callable bound by the finder and only invoked through ``read()``.
    """

    relative_path: str
    location: str
    is_dir: bool = False
    size: Optional[int] = None
    modified: Optional[float] = None
    reader: Optional[Callable[[], str]] = field(default=None, repr=False, compare=False)

    @property
    def name(self) -> str:
        return posixpath.basename(self.relative_path.rstrip("/"))

    def read(self) -> str:
        if self.reader is None:
            raise ValueError(f"No content reader bound for {self.relative_path}")
        return self.reader()


@dataclass(frozen=True)
class FinderResult:
    files: Tuple[DiscoveredItem, ...] = ()
    tree_view: str = ""

    @property
    def count(self) -> int:
        return len(self.files)

    @property
    def paths(self) -> Tuple[str, ...]:
        return tuple(f.relative_path for f in self.files)
