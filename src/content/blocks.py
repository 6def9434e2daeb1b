"""Content blocks.

Each block is an immutable unit of output that knows which renderer hook
produces its text; the builder never inspects block types itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from content.renderers import Renderer


@dataclass(frozen=True)
class TitleBlock:
    content: str
    level: int = 1

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_title(self)


@dataclass(frozen=True)
class CommentBlock:
    content: str

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_comment(self)


@dataclass(frozen=True)
class TextBlock:
    content: str

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_text(self)


@dataclass(frozen=True)
class TreeViewBlock:
    content: str

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_tree_view(self)


@dataclass(frozen=True)
class CodeBlock:
    content: str
    language: Optional[str] = None
    path: Optional[str] = None

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_code(self)


@dataclass(frozen=True)
class SeparatorBlock:
    content: str = ""

    def render(self, renderer: "Renderer") -> str:
        return renderer.render_separator(self)
