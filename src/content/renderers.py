"""Renderers turning blocks into text.

Markdown is the default output. The plain text renderer drops Markdown
syntax but keeps the same block order and spacing rules.
"""

from __future__ import annotations

import posixpath
import re
from typing import Optional, Protocol

from content.blocks import CodeBlock, CommentBlock, SeparatorBlock, TextBlock, TitleBlock, TreeViewBlock

_LANGUAGES = {
    ".py": "python", ".js": "javascript", ".ts": "typescript", ".jsx": "jsx", ".tsx": "tsx",
    ".go": "go", ".rs": "rust", ".rb": "ruby", ".php": "php", ".java": "java", ".kt": "kotlin",
    ".c": "c", ".h": "c", ".cpp": "cpp", ".hpp": "cpp", ".cs": "csharp", ".swift": "swift",
    ".sh": "bash", ".sql": "sql", ".html": "html", ".css": "css", ".scss": "scss",
    ".json": "json", ".yaml": "yaml", ".yml": "yaml", ".toml": "toml", ".xml": "xml",
    ".md": "markdown", ".rst": "rst", ".vue": "vue",
}


def guess_language(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return _LANGUAGES.get(posixpath.splitext(path)[1].lower())


class Renderer(Protocol):
    def render_title(self, block: TitleBlock) -> str:
        ...

    def render_comment(self, block: CommentBlock) -> str:
        ...

    def render_text(self, block: TextBlock) -> str:
        ...

    def render_tree_view(self, block: TreeViewBlock) -> str:
        ...

    def render_code(self, block: CodeBlock) -> str:
        ...

    def render_separator(self, block: SeparatorBlock) -> str:
        ...


_BACKTICKS_RE = re.compile(r"`+")


def _fenced(body: str, language: str = "") -> str:
    body = body if body.endswith("\n") else body + "\n"
    # The fence must be longer than any backtick run inside the body
    longest = max((len(run) for run in _BACKTICKS_RE.findall(body)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"{fence}{language}\n{body}{fence}\n"


class MarkdownRenderer:
    def render_title(self, block: TitleBlock) -> str:
        level = min(max(int(block.level), 1), 6)
        return f"{'#' * level} {block.content.strip()}\n\n"

    def render_comment(self, block: CommentBlock) -> str:
        return f"<!-- {block.content} -->\n"

    def render_text(self, block: TextBlock) -> str:
        text = block.content.rstrip("\n")
        return f"{text}\n" if text else ""

    def render_tree_view(self, block: TreeViewBlock) -> str:
        if not block.content.strip():
            return ""
        return _fenced(block.content) + "\n"

    def render_code(self, block: CodeBlock) -> str:
        body = ""
        if block.path:
            body += f"// Path: {block.path}\n"
        body += block.content.strip() + "\n\n"
        return _fenced(body, block.language or "")

    def render_separator(self, block: SeparatorBlock) -> str:
        return f"\n{block.content or '---'}\n\n"


class PlainTextRenderer:
    def render_title(self, block: TitleBlock) -> str:
        title = block.content.strip()
        return f"{title}\n{'=' * len(title)}\n\n"

    def render_comment(self, block: CommentBlock) -> str:
        return f"// {block.content}\n"

    def render_text(self, block: TextBlock) -> str:
        text = block.content.rstrip("\n")
        return f"{text}\n" if text else ""

    def render_tree_view(self, block: TreeViewBlock) -> str:
        if not block.content.strip():
            return ""
        content = block.content if block.content.endswith("\n") else block.content + "\n"
        return content + "\n"

    def render_code(self, block: CodeBlock) -> str:
        header = f"// Path: {block.path}\n" if block.path else ""
        return f"{header}{block.content.strip()}\n\n"

    def render_separator(self, block: SeparatorBlock) -> str:
        return f"\n{block.content or '-' * 40}\n\n"
