from __future__ import annotations

import logging
from typing import Optional

from content.builder import ContentBuilder
from content.renderers import Renderer
from core.errors import ValidationError
from core.models import GithubSource
from fetchers.base import add_file_blocks
from finders.github import GithubFinder
from modifiers.registry import ModifierRegistry

logger = logging.getLogger(__name__)


class GithubSourceFetcher:
    def __init__(
        self,
        finder: GithubFinder,
        modifiers: Optional[ModifierRegistry] = None,
        *,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self._finder = finder
        self._modifiers = modifiers or ModifierRegistry()
        self._renderer = renderer

    def supports(self, source: object) -> bool:
        return getattr(source, "kind", None) == GithubSource.kind

    def fetch(self, source: GithubSource) -> str:
        if not self.supports(source):
            raise ValidationError("Source must be a GitHub source")

        # Any listing or read failure propagates: no partial repository output
        result = self._finder.find(source)
        logger.info("GitHub source %s@%s: %d files", source.repository, source.branch, result.count)

        builder = ContentBuilder(self._renderer)
        if source.show_tree_view and result.tree_view:
            builder.add_tree_view(result.tree_view)

        add_file_blocks(builder, result.files, modifiers=self._modifiers, refs=source.modifiers)
        return builder.build()
