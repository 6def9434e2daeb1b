from __future__ import annotations

import logging
from typing import Optional

from content.builder import ContentBuilder
from content.renderers import Renderer
from core.errors import ValidationError
from core.models import LocalSource
from fetchers.base import add_file_blocks
from finders.local import LocalFinder
from modifiers.registry import ModifierRegistry

logger = logging.getLogger(__name__)


class LocalSourceFetcher:
    def __init__(
        self,
        finder: LocalFinder,
        modifiers: Optional[ModifierRegistry] = None,
        *,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self._finder = finder
        self._modifiers = modifiers or ModifierRegistry()
        self._renderer = renderer

    def supports(self, source: object) -> bool:
        return getattr(source, "kind", None) == LocalSource.kind

    def fetch(self, source: LocalSource) -> str:
        if not self.supports(source):
            raise ValidationError("Source must be a local file source")

        result = self._finder.find(source)
        logger.info("Local source %s: %d files", source.description or source.source_paths, result.count)

        builder = ContentBuilder(self._renderer)
        if source.show_tree_view and source.tree_view.enabled and result.tree_view:
            builder.add_tree_view(result.tree_view)

        add_file_blocks(
            builder,
            result.files,
            modifiers=self._modifiers,
            refs=source.modifiers,
            path_prefix=source.path_prefix,
        )
        return builder.build()
