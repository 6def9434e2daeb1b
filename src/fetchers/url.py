"""Fetcher for URL sources.

Each URL is processed on its own: a bad status code or a failing request
becomes an inline comment in the output and the next URL is still
fetched.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional

import httpx

from clients.html import HtmlCleaner, SelectorExtractor
from content.blocks import CommentBlock, TextBlock
from content.builder import ContentBuilder
from content.renderers import Renderer
from core.errors import ValidationError
from core.models import UrlSource

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "ctx-generator bot",
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-US,en;q=0.9",
}


class UrlSourceFetcher:
    def __init__(
        self,
        *,
        timeout: float = 20.0,
        verify: bool = True,
        default_headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        cleaner: Optional[HtmlCleaner] = None,
        extractor: Optional[SelectorExtractor] = None,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self._timeout = float(timeout)
        self._verify = bool(verify)
        self._default_headers = dict(DEFAULT_HEADERS if default_headers is None else default_headers)
        self._transport = transport
        self._cleaner = cleaner or HtmlCleaner()
        self._extractor = extractor or SelectorExtractor()
        self._renderer = renderer

    def supports(self, source: object) -> bool:
        return getattr(source, "kind", None) == UrlSource.kind

    def fetch(self, source: UrlSource) -> str:
        if not self.supports(source):
            raise ValidationError("Source must be a URL source")

        builder = ContentBuilder(self._renderer)
        for url in source.urls:
            # Blocks for one URL are collected first so a failure never
            # leaves half of its output in the document
            try:
                blocks = self._fetch_one(url, source)
            except Exception as e:
                logger.warning("URL %s failed: %s", url, e)
                blocks = [CommentBlock(f"URL: {url}"), CommentBlock(f"Error: {e}")]

            for block in blocks:
                builder.add_block(block)
            builder.add_separator()

        return builder.build()

    def _create_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._timeout,
            verify=self._verify,
            follow_redirects=True,
            transport=self._transport,
        )

    def _fetch_one(self, url: str, source: UrlSource) -> List[object]:
        headers = {**self._default_headers, **dict(source.headers)}
        with self._create_client() as client:
            resp = client.get(url, headers=headers)

        if not 200 <= resp.status_code < 300:
            logger.warning("URL %s returned HTTP %d", url, resp.status_code)
            return [CommentBlock(f"URL: {url}"), CommentBlock(f"Error: HTTP status code {resp.status_code}")]

        html = resp.text
        blocks: List[object] = []
        if source.has_selector:
            selector = (source.selector or "").strip()
            extracted = self._extractor.extract(html, selector)
            if extracted.strip():
                blocks.append(CommentBlock(f"URL: {url} (selector: {selector})"))
                html = extracted
            else:
                # Fall back to the whole page, flagged so the gap is visible
                blocks.append(CommentBlock(f"URL: {url}"))
                blocks.append(CommentBlock(f"Warning: Selector '{selector}' didn't match any content"))
        else:
            blocks.append(CommentBlock(f"URL: {url}"))

        blocks.append(TextBlock(self._cleaner.clean(html)))
        blocks.append(CommentBlock(f"END OF URL: {url}"))
        return blocks
