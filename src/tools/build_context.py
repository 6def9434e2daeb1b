"""MCP tool that compiles a context document from a list of sources.

Registers 'build_context'. Source records use the configuration format
(camelCase keys, a "type" of file, github, url or tree).
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from config import PROJECT_ROOT
from core.errors import ValidationError
from fetchers.document import DocumentCompiler
from fetchers.registry import FetcherRegistry
from sources.source_factory import create_sources


def register(mcp: FastMCP, *, registry: FetcherRegistry) -> None:
    compiler = DocumentCompiler(registry)

    @mcp.tool(name="build_context")
    async def build_context(
        sources: List[Dict[str, Any]],
        title: str = "",
        tags: Optional[List[str]] = None,
    ) -> str:
        """Fetch every source and return one Markdown document.

        Params:
          - sources: source records, e.g.
            {"type": "file", "sourcePaths": ["src"], "filePattern": "*.py"}
            {"type": "github", "repository": "owner/repo", "sourcePaths": ["docs"]}
            {"type": "url", "urls": ["https://example.com"], "selector": "main"}
            {"type": "tree", "sourcePaths": ["."], "maxDepth": 2}
          - title: optional document title.
          - tags: only sources carrying one of these tags are included.

        Returns:
          The rendered document. Failing sources appear as error comments.

        Raises:
          ValidationError when a source record is malformed.
        """
        if not sources:
            raise ValidationError("At least one source is required")

        # Validate every record before any source is fetched
        parsed = create_sources(sources, root_path=str(PROJECT_ROOT))

        doc = await asyncio.to_thread(compiler.compile, parsed, title=title, tags=tags)
        return doc.content
