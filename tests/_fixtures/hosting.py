"""In-memory hosting API used by fetcher and orchestrator tests."""

from __future__ import annotations

import json
from typing import Dict, List, Optional, Tuple, Union

from repodocs.config import GitHubConfig
from repodocs.errors import RemoteFetchError
from repodocs.github.client import HostingClient

API = "https://api.github.com"
RAW = "https://raw.githubusercontent.com"

Route = Union[bytes, str, dict, list, int, Exception]


class FakeHostingClient(HostingClient):
    """Serves canned responses keyed by URL; unknown URLs answer 404."""

    def __init__(self, routes: Optional[Dict[str, Route]] = None, *, token: Optional[str] = None) -> None:
        super().__init__(GitHubConfig(api_url=API, raw_url=RAW), token_provider=lambda: token)
        self.routes: Dict[str, Route] = dict(routes or {})
        self.calls: List[Tuple[str, Dict[str, str]]] = []

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.calls]

    def _get(self, url: str, headers: Dict[str, str]) -> bytes:
        self.calls.append((url, dict(headers)))
        route = self.routes.get(url, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, int):
            raise RemoteFetchError("Not Found" if route == 404 else f"HTTP {route}", status=route)
        if isinstance(route, bytes):
            return route
        if isinstance(route, str):
            return route.encode("utf-8")
        return json.dumps(route).encode("utf-8")


def file_entry(path: str) -> dict:
    return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "file"}


def dir_entry(path: str) -> dict:
    return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "dir"}
