"""MCP tool that lists files a source would include.

Registers the 'list_files' tool which runs discovery and filtering for a
local path or a GitHub repository without reading any file contents.
"""

from __future__ import annotations

import asyncio
from typing import List, Literal, Optional

from mcp.server.fastmcp import FastMCP

from clients.github.client import GitHubClient
from config import GITHUB_TOKEN, HTTP_VERIFY, PROJECT_ROOT
from core.errors import ValidationError
from finders.github import GithubFinder
from finders.local import LocalFinder
from sources.source_factory import create_source

SourceType = Literal["local", "github"]


def register(mcp: FastMCP, *, github_client: Optional[GitHubClient] = None) -> None:
    @mcp.tool(name="list_files")
    async def list_files(
        source: SourceType = "local",
        paths: Optional[List[str]] = None,
        repository: Optional[str] = None,
        branch: str = "main",
        file_pattern: Optional[List[str]] = None,
        not_path: Optional[List[str]] = None,
        tree: bool = False,
    ) -> List[str]:
        """List the files a source would include, after filtering.

        Params:
          - source: "local" or "github" (default: "local").
          - paths: paths to scan (default: ["."] locally, repo root on GitHub).
          - repository: "owner/repo", required when source is "github".
          - branch: branch or tag for GitHub (default: "main").
          - file_pattern: file name globs (default: all files).
          - not_path: path patterns to exclude.
          - tree: return the rendered tree lines instead of paths.

        Returns:
          Sorted list of relative paths, or tree lines when tree=True.

        Raises:
          ValidationError for invalid inputs; NotFoundError or
          ExternalServiceError when discovery fails.
        """
        record = {
            "filePattern": file_pattern or "*",
            "notPath": not_path or [],
        }

        if source == "github":
            if not repository or not repository.strip():
                raise ValidationError("Missing repository for github source")
            record.update(type="github", repository=repository, branch=branch, sourcePaths=paths or "")
            finder = GithubFinder(
                github_client or GitHubClient(verify=HTTP_VERIFY),
                default_token=GITHUB_TOKEN,
            )
        elif source == "local":
            record.update(type="file", sourcePaths=paths or ["."])
            finder = LocalFinder(project_root=PROJECT_ROOT)
        else:
            raise ValidationError(f"Unknown source: {source}")

        src = create_source(record, root_path=str(PROJECT_ROOT))

        # Discovery is blocking IO; keep the event loop responsive
        result = await asyncio.to_thread(finder.find, src)
        if tree:
            return result.tree_view.splitlines()
        return list(result.paths)
