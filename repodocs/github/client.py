"""Thin HTTP transport for the GitHub REST API and raw-content host."""

from __future__ import annotations

import json
from http.client import HTTPException
from typing import Any, Callable, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..config import GitHubConfig, github_token
from ..errors import RemoteFetchError
from ..logging import get_logger

_API_ACCEPT = "application/vnd.github.v3+json"
_USER_AGENT = "repodocs"


class HostingClient:
    """Issues read-only GET requests against the hosting API.

    The optional token is looked up through ``token_provider`` on every
    request so credential changes in the environment are picked up without a
    restart.
    """

    def __init__(
        self,
        config: GitHubConfig | None = None,
        *,
        token_provider: Callable[[], Optional[str]] = github_token,
    ) -> None:
        self.config = config or GitHubConfig()
        self._token_provider = token_provider
        self.logger = get_logger("github.client")

    def api_url(self, *segments: str) -> str:
        path = "/".join(quote(segment, safe="/") for segment in segments if segment)
        return f"{self.config.api_url.rstrip('/')}/{path}"

    def raw_url(self, owner: str, repo: str, branch: str, path: str) -> str:
        base = self.config.raw_url.rstrip("/")
        return f"{base}/{quote(owner)}/{quote(repo)}/{quote(branch)}/{quote(path, safe='/')}"

    def get_json(self, url: str) -> Any:
        """GET ``url`` from the API and decode the JSON body."""
        raw = self._get(url, self._api_headers())
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RemoteFetchError(f"Hosting API returned invalid JSON for {url}") from exc

    def get_text(self, url: str) -> str:
        """GET raw file content as text."""
        raw = self._get(url, {"User-Agent": _USER_AGENT})
        return raw.decode("utf-8", errors="replace")

    def _api_headers(self) -> Dict[str, str]:
        headers = {"Accept": _API_ACCEPT, "User-Agent": _USER_AGENT}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    def _get(self, url: str, headers: Dict[str, str]) -> bytes:
        self.logger.debug("GET %s", url)
        request = Request(url, headers=headers, method="GET")
        try:
            with urlopen(request, timeout=self.config.request_timeout) as response:  # type: ignore[arg-type]
                return response.read()
        except HTTPError as exc:
            reason = exc.reason or f"HTTP {exc.code}"
            raise RemoteFetchError(str(reason), status=exc.code) from exc
        except URLError as exc:
            raise RemoteFetchError(f"Request to {url} failed: {exc.reason}") from exc
        except (OSError, HTTPException) as exc:
            raise RemoteFetchError(f"Request to {url} failed: {exc}") from exc


__all__ = ["HostingClient"]
