"""Assemble several sources into one document.

Sources are independent: a failure in one is recorded and rendered as an
error comment, and the remaining sources still run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from content.builder import ContentBuilder
from content.renderers import Renderer
from core.errors import ContextGeneratorError
from core.models import Source
from fetchers.registry import FetcherRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceError:
    source: str
    message: str


@dataclass
class CompiledDocument:
    title: str
    content: str
    errors: List[SourceError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _label(source: Source) -> str:
    return source.description or f"{source.kind} source"


def select_by_tags(sources: Iterable[Source], tags: Optional[Sequence[str]]) -> List[Source]:
    wanted = {t for t in (tags or ()) if t}
    if not wanted:
        return list(sources)
    return [s for s in sources if wanted.intersection(s.tags)]


class DocumentCompiler:
    def __init__(self, registry: FetcherRegistry, *, renderer: Optional[Renderer] = None) -> None:
        self._registry = registry
        self._renderer = renderer

    def compile(
        self,
        sources: Iterable[Source],
        *,
        title: str = "",
        tags: Optional[Sequence[str]] = None,
    ) -> CompiledDocument:
        builder = ContentBuilder(self._renderer)
        errors: List[SourceError] = []

        if title:
            builder.add_title(title)

        for source in select_by_tags(sources, tags):
            label = _label(source)
            if source.description:
                builder.add_title(source.description, level=2)
            try:
                content = self._registry.fetch(source)
            except (ContextGeneratorError, OSError) as e:
                logger.error("Source %r failed: %s", label, e)
                errors.append(SourceError(source=label, message=str(e)))
                builder.add_comment(f"Error in source '{label}': {e}")
            else:
                builder.add_text(content)
            builder.add_separator()

        return CompiledDocument(title=title, content=builder.build(), errors=errors)
