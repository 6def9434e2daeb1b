"""Core protocol and interface definitions.

Collaborator contracts consumed by the pipeline: the filesystem used by
local discovery, the filter and modifier shapes, and the per-variant
source fetcher.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Protocol, Sequence, Tuple, TypeVar

T = TypeVar("T")


class FileSystem(Protocol):
    """Contract for filesystem access used by local discovery."""
    def exists(self, path: str) -> bool:
        ...

    def is_dir(self, path: str) -> bool:
        ...

    def is_file(self, path: str) -> bool:
        ...

    def list_dir(self, path: str) -> List[str]:
        ...

    def read_text(self, path: str) -> str:
        ...

    def stat(self, path: str) -> Tuple[int, float]:
        ...


class Filter(Protocol):
    """Pure, order-preserving predicate family over discovered items."""
    def apply(self, items: Sequence[T]) -> List[T]:
        ...


class Modifier(Protocol):
    """Path-scoped content post-processor."""
    id: str

    def supports(self, path: str) -> bool:
        ...

    def modify(self, content: str, context: Mapping[str, Any]) -> str:
        ...


class SourceFetcher(Protocol):
    """Strategy turning one source variant into text."""
    def supports(self, source: object) -> bool:
        ...

    def fetch(self, source: Any) -> str:
        ...
