from __future__ import annotations

from typing import Optional

from content.builder import ContentBuilder
from content.renderers import Renderer
from core.errors import ValidationError
from core.models import TreeSource
from finders.local import LocalFinder


class TreeSourceFetcher:
    """Render only the directory structure of a tree source."""

    def __init__(self, finder: LocalFinder, *, renderer: Optional[Renderer] = None) -> None:
        self._finder = finder
        self._renderer = renderer

    def supports(self, source: object) -> bool:
        return getattr(source, "kind", None) == TreeSource.kind

    def fetch(self, source: TreeSource) -> str:
        if not self.supports(source):
            raise ValidationError("Source must be a tree source")

        result = self._finder.find(source)
        builder = ContentBuilder(self._renderer)
        if not result.files:
            return builder.add_comment("No files matched").build()
        return builder.add_tree_view(result.tree_view).build()
