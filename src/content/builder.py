from __future__ import annotations

from typing import List, Optional, Tuple

from content.blocks import CodeBlock, CommentBlock, SeparatorBlock, TextBlock, TitleBlock, TreeViewBlock
from content.renderers import MarkdownRenderer, Renderer


class ContentBuilder:
    """Accumulates blocks in insertion order and renders them on build().

    Every add_* method returns the builder so calls can be chained. No block
    is ever reordered or dropped.
    """

    def __init__(self, renderer: Optional[Renderer] = None) -> None:
        self._renderer: Renderer = renderer or MarkdownRenderer()
        self._blocks: List[object] = []

    def add_block(self, block: object) -> "ContentBuilder":
        self._blocks.append(block)
        return self

    def add_title(self, title: str, level: int = 1) -> "ContentBuilder":
        return self.add_block(TitleBlock(title, level))

    def add_comment(self, comment: str) -> "ContentBuilder":
        return self.add_block(CommentBlock(comment))

    def add_text(self, text: str) -> "ContentBuilder":
        return self.add_block(TextBlock(text))

    def add_tree_view(self, tree: str) -> "ContentBuilder":
        return self.add_block(TreeViewBlock(tree))

    def add_code_block(self, code: str, language: Optional[str] = None, path: Optional[str] = None) -> "ContentBuilder":
        return self.add_block(CodeBlock(code, language, path))

    def add_separator(self, separator: str = "") -> "ContentBuilder":
        return self.add_block(SeparatorBlock(separator))

    @property
    def blocks(self) -> Tuple[object, ...]:
        return tuple(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def build(self) -> str:
        return "".join(block.render(self._renderer) for block in self._blocks)
