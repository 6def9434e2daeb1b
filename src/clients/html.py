"""HTML extraction helpers for URL sources.

Both helpers are opaque text transforms built on lxml: one reduces a page
to readable text, the other keeps only the elements matching a CSS
selector (via cssselect).
"""

from __future__ import annotations

import re
from typing import List

import lxml.html
from lxml import etree
from lxml.cssselect import CSSSelector

_DROP_TAGS = ("script", "style", "noscript", "template", "iframe", "svg", "head")
_BLOCK_TAGS = {
    "p", "div", "section", "article", "header", "footer", "main", "aside", "nav",
    "h1", "h2", "h3", "h4", "h5", "h6", "li", "ul", "ol", "pre", "table", "tr",
    "blockquote", "br", "hr", "dd", "dt",
}
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")
# lxml refuses str input that carries its own encoding declaration
_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)


def _strip_declaration(html: str) -> str:
    return _XML_DECL_RE.sub("", html, count=1)


def _parse(html: str) -> etree._Element:
    return lxml.html.document_fromstring(_strip_declaration(html))


class HtmlCleaner:
    def clean(self, html: str) -> str:
        html = _strip_declaration(html or "")
        if not html.strip():
            return ""

        root = lxml.html.fromstring(html)
        if root.tag in _DROP_TAGS:
            return ""
        for el in list(root.iter(*_DROP_TAGS)):
            el.drop_tree()
        # Comments and processing instructions are not content
        for el in list(root.xpath("//comment() | //processing-instruction()")):
            el.drop_tree()

        for el in root.iter(*_BLOCK_TAGS):
            el.tail = "\n" + (el.tail or "")

        text = root.text_content()
        lines = [" ".join(line.split()) for line in text.splitlines()]
        return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


class SelectorExtractor:
    def extract(self, html: str, selector: str) -> str:
        """Return the outer HTML of every element matching `selector`."""
        if not (html or "").strip() or not (selector or "").strip():
            return ""

        matches: List[etree._Element] = CSSSelector(selector.strip())(_parse(html))
        parts = [lxml.html.tostring(el, encoding="unicode", with_tail=False) for el in matches]
        return "\n".join(p for p in parts if p.strip())
