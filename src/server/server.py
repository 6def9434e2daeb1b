"""Server bootstrap for the context generator MCP service.

Creates the FastMCP instance, wires clients, fetchers and tools, and
starts the MCP server (stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from clients.github.client import GitHubClient
from config import (
    GITHUB_API_URL,
    GITHUB_TIMEOUT,
    GITHUB_TOKEN,
    HTTP_VERIFY,
    LOG_LEVEL,
    PROJECT_ROOT,
    URL_TIMEOUT,
)
from fetchers.registry import create_fetcher_registry

from tools.build_context import register as register_build_context
from tools.list_files import register as register_list_files
from tools.read_file import register as register_read_file

mcp = FastMCP("ctx-generator")


def register_tools() -> None:
    github_client = GitHubClient(
        base_url=GITHUB_API_URL,
        token=GITHUB_TOKEN,
        timeout=GITHUB_TIMEOUT,
        verify=HTTP_VERIFY,
    )
    registry = create_fetcher_registry(
        project_root=PROJECT_ROOT,
        github_client=github_client,
        github_token=GITHUB_TOKEN,
        url_timeout=URL_TIMEOUT,
        http_verify=HTTP_VERIFY,
    )

    register_list_files(mcp, github_client=github_client)
    register_read_file(mcp, github_client=github_client)
    register_build_context(mcp, registry=registry)


register_tools()


def main() -> None:
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
