"""Fetcher registry: dispatches each source to the fetcher for its variant."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import httpx

from clients.github.client import GitHubClient
from content.renderers import Renderer
from core.errors import ValidationError
from core.interfaces import FileSystem, SourceFetcher
from fetchers.github import GithubSourceFetcher
from fetchers.local import LocalSourceFetcher
from fetchers.tree import TreeSourceFetcher
from fetchers.url import UrlSourceFetcher
from finders.github import GithubFinder
from finders.local import LocalFinder
from modifiers.registry import ModifierRegistry, default_registry


class FetcherRegistry:
    def __init__(self, fetchers: Optional[Iterable[SourceFetcher]] = None) -> None:
        self._fetchers: List[SourceFetcher] = list(fetchers or ())

    def register(self, fetcher: SourceFetcher) -> None:
        self._fetchers.append(fetcher)

    def find(self, source: object) -> SourceFetcher:
        for fetcher in self._fetchers:
            if fetcher.supports(source):
                return fetcher
        kind = getattr(source, "kind", type(source).__name__)
        raise ValidationError(f"No fetcher registered for source type: {kind}")

    def fetch(self, source: object) -> str:
        return self.find(source).fetch(source)


def create_fetcher_registry(
    *,
    project_root: Path,
    github_client: Optional[GitHubClient] = None,
    github_token: Optional[str] = None,
    modifiers: Optional[ModifierRegistry] = None,
    filesystem: Optional[FileSystem] = None,
    renderer: Optional[Renderer] = None,
    url_timeout: float = 20.0,
    http_verify: bool = True,
    url_transport: Optional[httpx.BaseTransport] = None,
) -> FetcherRegistry:
    """Wire the four built-in fetchers with shared collaborators."""
    modifiers = modifiers or default_registry()
    local_finder = LocalFinder(filesystem, project_root=project_root)
    github_finder = GithubFinder(github_client or GitHubClient(verify=http_verify), default_token=github_token)

    return FetcherRegistry(
        [
            LocalSourceFetcher(local_finder, modifiers, renderer=renderer),
            GithubSourceFetcher(github_finder, modifiers, renderer=renderer),
            UrlSourceFetcher(timeout=url_timeout, verify=http_verify, transport=url_transport, renderer=renderer),
            TreeSourceFetcher(local_finder, renderer=renderer),
        ]
    )
