"""GitHub repository discovery.

Lists every configured source path through the contents API, expanding
directories with an explicit work stack so arbitrarily deep repositories
never hit the interpreter's recursion limit. File contents are bound as
lazy readers and only requested when a file is actually emitted or
inspected by the content filter.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Dict, List, Optional

from clients.github.client import GitHubClient
from core.errors import ExternalServiceError
from core.models import GithubSource, TreeViewConfig
from filters.chain import apply_filters, build_filter_chain
from finders.models import DiscoveredItem, FinderResult
from tree.builder import build_tree_view

logger = logging.getLogger(__name__)


class GithubFinder:
    def __init__(self, client: GitHubClient, *, default_token: Optional[str] = None) -> None:
        self._client = client
        self._default_token = default_token

    def find(self, source: GithubSource) -> FinderResult:
        token = source.github_token or self._default_token

        entries = self._discover(source, token=token)
        logger.debug("Discovered %d files in %s@%s", len(entries), source.repository, source.branch)

        items = [self._to_item(source, entry, token=token) for entry in entries]
        files = apply_filters(build_filter_chain(source.criteria), items)

        tree_view = build_tree_view([f.relative_path for f in files], TreeViewConfig())
        return FinderResult(files=tuple(files), tree_view=tree_view)

    def _discover(self, source: GithubSource, *, token: Optional[str]) -> List[Dict[str, Any]]:
        files: List[Dict[str, Any]] = []

        for root in source.source_paths:
            listing = self._list(source, root, token=token)
            # Stack of listings, each consumed front to back, keeps API order
            stack = [iter(listing)]
            while stack:
                entry = next(stack[-1], None)
                if entry is None:
                    stack.pop()
                    continue

                # Anything that is not a directory (file, symlink, submodule) is a leaf
                if entry.get("type") == "dir":
                    stack.append(iter(self._list(source, str(entry.get("path") or ""), token=token)))
                else:
                    files.append(entry)

        return files

    def _list(self, source: GithubSource, path: str, *, token: Optional[str]) -> List[Dict[str, Any]]:
        return self._client.list_contents(
            source.owner,
            source.repo,
            path,
            ref=source.branch,
            token=token,
        )

    def _to_item(self, source: GithubSource, entry: Dict[str, Any], *, token: Optional[str]) -> DiscoveredItem:
        path = entry.get("path")
        if not isinstance(path, str) or not path:
            raise ExternalServiceError(f"Malformed GitHub entry without a path in {source.repository}")

        size = entry.get("size")
        return DiscoveredItem(
            relative_path=path,
            location=f"{source.repository}/{path}",
            size=int(size) if isinstance(size, int) else None,
            reader=functools.partial(
                self._client.read_file,
                source.owner,
                source.repo,
                path,
                ref=source.branch,
                token=token,
            ),
        )
