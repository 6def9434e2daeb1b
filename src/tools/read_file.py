"""MCP tool that reads a text file from the project or a GitHub repository.

Registers the 'read_file' tool. Local reads are confined to PROJECT_ROOT.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Literal, Optional

from mcp.server.fastmcp import FastMCP

from clients.github.client import GitHubClient
from clients.github.inputs import normalize_path, parse_repository
from config import GITHUB_TOKEN, HTTP_VERIFY, MAX_FILE_CHARS, PROJECT_ROOT
from core.errors import NotFoundError, ValidationError
from core.paths import resolve_under_root

SourceType = Literal["local", "github"]

TRUNCATED_MARKER = "\n\n...[TRUNCATED]..."


def _truncate(text: str, max_chars: int) -> str:
    if max_chars <= 0:
        raise ValidationError("max_chars must be positive")
    if len(text) > max_chars:
        return text[:max_chars] + TRUNCATED_MARKER
    return text


def _read_local(project_root: Path, path: str) -> str:
    p = resolve_under_root(project_root, path)
    if not p.exists():
        raise NotFoundError(f"File not found: {path}")
    if not p.is_file():
        raise ValidationError(f"Not a file: {path}")
    return p.read_text(encoding="utf-8", errors="replace")


def register(mcp: FastMCP, *, github_client: Optional[GitHubClient] = None) -> None:
    @mcp.tool(name="read_file")
    async def read_file(
        source: SourceType = "local",
        path: str = "",
        repository: Optional[str] = None,
        branch: str = "main",
        max_chars: int = MAX_FILE_CHARS,
    ) -> str:
        """Read a text file and return its UTF-8 contents.

        Parameters:
          - source: "local" or "github" (default: "local").
          - path: file path relative to the project root or repository root.
          - repository: "owner/repo", required when source is "github".
          - branch: branch or tag for GitHub (default: "main").
          - max_chars: maximum characters to return (default from config).

        Returns:
          The file contents. Content longer than max_chars is truncated and
          the suffix "\n\n...[TRUNCATED]..." appended.

        Raises:
          ValidationError for missing/invalid inputs, AccessDeniedError for
          paths outside the project, NotFoundError when the file is missing.
        """
        if not path or not path.strip():
            raise ValidationError("Missing file path")

        if source == "github":
            if not repository or not repository.strip():
                raise ValidationError("Missing repository for github source")
            owner, repo = parse_repository(repository)
            client = github_client or GitHubClient(verify=HTTP_VERIFY, token=GITHUB_TOKEN)
            text = await asyncio.to_thread(client.read_file, owner, repo, normalize_path(path), ref=branch)
        elif source == "local":
            text = await asyncio.to_thread(_read_local, PROJECT_ROOT, path)
        else:
            raise ValidationError(f"Unknown source: {source}")

        return _truncate(text, int(max_chars))
