"""GitHub client module: list directory contents and read file contents.

A small blocking client over the GitHub REST contents API. Listing a
directory returns the raw entries; listing a path that is a file returns
a one-item list. File reads decode the base64 payload the API returns.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

import httpx

from core.errors import ExternalServiceError, NotFoundError

from .inputs import normalize_path, normalize_ref

logger = logging.getLogger(__name__)


class GitHubClient:
    """Blocking GitHub client for the contents API.

    Purpose:
      - list_contents(owner, repo, path, ref=...) -> List[dict]
      - read_file(owner, repo, path, ref=...) -> str

    Key behavior:
      - Every request sends a fixed Accept header and User-Agent.
      - A token (per call, or the client default) is sent as a Bearer header.
      - Non-2xx responses, transport failures and malformed JSON raise.
    """

    BASE_URL = "https://api.github.com"
    JSON_ACCEPT = "application/vnd.github.v3+json"
    USER_AGENT = "ctx-generator"

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 20.0,
        verify: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._token = (token or "").strip() or None
        self._timeout = float(timeout)
        self._verify = bool(verify)
        self._transport = transport

    def list_contents(
        self,
        owner: str,
        repo: str,
        path: str = "",
        *,
        ref: str = "main",
        token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List a repository path; a non-directory path (file, symlink, submodule) yields a single entry."""
        data = self._get_json(
            self._contents_url(owner, repo, path),
            params={"ref": normalize_ref(ref)},
            token=token,
            context=f"list {owner}/{repo}:{path or '/'}",
        )

        if isinstance(data, dict) and isinstance(data.get("type"), str):
            return [data]
        if not isinstance(data, list):
            raise ExternalServiceError(
                f"Unexpected GitHub listing for {owner}/{repo}:{path or '/'}: expected a list"
            )
        return [item for item in data if isinstance(item, dict)]

    def read_file(
        self,
        owner: str,
        repo: str,
        path: str,
        *,
        ref: str = "main",
        token: Optional[str] = None,
    ) -> str:
        """Read one file and decode the base64 payload as UTF-8 text."""
        data = self._get_json(
            self._contents_url(owner, repo, path),
            params={"ref": normalize_ref(ref)},
            token=token,
            context=f"read {owner}/{repo}:{path}",
        )

        content = data.get("content") if isinstance(data, dict) else None
        if not isinstance(content, str):
            raise ExternalServiceError(f"Could not get content for file: {path}")

        try:
            raw = base64.b64decode(content)
        except (binascii.Error, ValueError) as e:
            raise ExternalServiceError(f"Invalid base64 content for file: {path}") from e
        return raw.decode("utf-8", errors="replace")

    # --- HTTP helpers ---

    def _contents_url(self, owner: str, repo: str, path: str) -> str:
        clean = normalize_path(path)
        url = f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/contents"
        return f"{url}/{quote(clean, safe='/')}" if clean else url

    def _build_headers(self, token: Optional[str] = None) -> dict[str, str]:
        headers = {
            "Accept": self.JSON_ACCEPT,
            "User-Agent": self.USER_AGENT,
        }
        auth = (token or "").strip() or self._token
        if auth:
            headers["Authorization"] = f"Bearer {auth}"
        return headers

    def _create_client(self, token: Optional[str] = None) -> httpx.Client:
        return httpx.Client(
            base_url=self._base_url,
            headers=self._build_headers(token),
            timeout=self._timeout,
            verify=self._verify,
            transport=self._transport,
        )

    def _external(self, context: str, err: BaseException) -> ExternalServiceError:
        return ExternalServiceError(f"GitHub request failed ({context}): {err}")

    def _raise_for_status(self, resp: httpx.Response, *, context: str) -> None:
        if resp.status_code == 404:
            raise NotFoundError(f"GitHub resource not found ({context})")
        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._external(context, e) from e

    def _get_json(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        token: Optional[str] = None,
        context: str,
    ) -> Any:
        logger.debug("GitHub GET %s %s", url, dict(params or {}))
        try:
            with self._create_client(token) as client:
                resp = client.get(url, params=dict(params or {}))
        except httpx.HTTPError as e:
            raise self._external(f"GET {url}", e) from e

        self._raise_for_status(resp, context=context)

        try:
            return resp.json()
        except ValueError as e:
            raise ExternalServiceError(f"Failed to parse GitHub API response ({context}): {e}") from e
