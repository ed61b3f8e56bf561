"""Fetchers that gather repository context from the hosting API."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from ..errors import RemoteFetchError
from ..logging import get_logger
from ..models import (
    UNKNOWN_LANGUAGE,
    KeyFileContent,
    KeyFileResult,
    RepositoryIdentity,
    RepositoryMetadata,
)
from .client import HostingClient

SOURCE_DIRECTORIES: tuple[str, ...] = ("src", "lib", "app", "components", "pages")
MAX_TREE_PATHS = 50
MAX_NESTED_PATHS = 10

MANIFEST_FILES: tuple[str, ...] = (
    "README.md",
    "readme.md",
    "package.json",
    "pyproject.toml",
    "Cargo.toml",
    "go.mod",
    "requirements.txt",
    "setup.py",
)
ENTRY_POINT_FILES: tuple[str, ...] = (
    "src/index.ts",
    "src/index.js",
    "src/main.ts",
    "src/main.py",
    "main.go",
    "lib/index.ts",
)
MANIFEST_CHAR_LIMIT = 5000
ENTRY_POINT_CHAR_LIMIT = 3000
PRIMARY_BRANCH = "main"
FALLBACK_BRANCH = "master"


class MetadataFetcher:
    """Retrieves the repository resource and keeps the fields we describe."""

    def __init__(self, client: HostingClient) -> None:
        self.client = client
        self.logger = get_logger("github.metadata")

    def fetch(self, identity: RepositoryIdentity) -> RepositoryMetadata:
        url = self.client.api_url("repos", identity.owner, identity.name)
        try:
            data = self.client.get_json(url)
        except RemoteFetchError as exc:
            raise RemoteFetchError(f"Failed to fetch repo: {exc}", status=exc.status) from exc
        if not isinstance(data, Mapping):
            raise RemoteFetchError("Failed to fetch repo: unexpected response payload")

        stars = data.get("stargazers_count")
        metadata = RepositoryMetadata(
            name=str(data.get("name") or identity.name),
            description=data.get("description") or "",
            language=data.get("language") or UNKNOWN_LANGUAGE,
            stars=stars if isinstance(stars, int) and stars >= 0 else 0,
        )
        self.logger.debug(
            "Fetched metadata for %s (language=%s, stars=%d)",
            identity.slug,
            metadata.language,
            metadata.stars,
        )
        return metadata


class TreeFetcher:
    """Lists top-level files plus one level into conventional source roots.

    Listing failures never propagate: a failed root listing yields an empty
    list and a failed nested listing skips that directory.
    """

    def __init__(self, client: HostingClient) -> None:
        self.client = client
        self.logger = get_logger("github.tree")

    def fetch(self, identity: RepositoryIdentity) -> List[str]:
        root_entries = self._list(identity, "")
        paths: List[str] = []
        for entry in root_entries:
            entry_type = entry.get("type")
            if entry_type == "file":
                paths.append(str(entry.get("path", "")))
            elif entry_type == "dir" and entry.get("name") in SOURCE_DIRECTORIES:
                # Nested directories are skipped; only file entries count toward the per-directory cap.
                nested = [
                    str(child.get("path", ""))
                    for child in self._list(identity, str(entry.get("path", "")))
                    if child.get("type") == "file"
                ]
                paths.extend(nested[:MAX_NESTED_PATHS])
        return paths[:MAX_TREE_PATHS]

    def _list(self, identity: RepositoryIdentity, path: str) -> List[Mapping[str, Any]]:
        url = self.client.api_url("repos", identity.owner, identity.name, "contents", path)
        try:
            data = self.client.get_json(url)
        except RemoteFetchError as exc:
            self.logger.debug("Listing %s failed for %s: %s", path or "/", identity.slug, exc)
            return []
        if not isinstance(data, list):
            self.logger.debug("Listing %s for %s was not a directory", path or "/", identity.slug)
            return []
        return [entry for entry in data if isinstance(entry, Mapping)]


class KeyFileFetcher:
    """Best-effort retrieval of manifests, readmes and one entry point."""

    def __init__(
        self,
        client: HostingClient,
        *,
        manifest_files: Iterable[str] = MANIFEST_FILES,
        entry_point_files: Iterable[str] = ENTRY_POINT_FILES,
    ) -> None:
        self.client = client
        self.manifest_files = tuple(manifest_files)
        self.entry_point_files = tuple(entry_point_files)
        self.logger = get_logger("github.key_files")

    def fetch(self, identity: RepositoryIdentity) -> List[KeyFileContent]:
        contents: List[KeyFileContent] = []
        for path in self.manifest_files:
            result = self.fetch_file(identity, path, PRIMARY_BRANCH)
            if not result.present:
                result = self.fetch_file(identity, path, FALLBACK_BRANCH)
            if result.present:
                contents.append(result.truncated(MANIFEST_CHAR_LIMIT))

        # Entry points are only looked up on the primary branch.
        for path in self.entry_point_files:
            result = self.fetch_file(identity, path, PRIMARY_BRANCH)
            if result.present:
                contents.append(result.truncated(ENTRY_POINT_CHAR_LIMIT))
                break

        self.logger.debug(
            "Collected %d key files for %s: %s",
            len(contents),
            identity.slug,
            ", ".join(item.path for item in contents) or "(none)",
        )
        return contents

    def fetch_file(self, identity: RepositoryIdentity, path: str, branch: str) -> KeyFileResult:
        url = self.client.raw_url(identity.owner, identity.name, branch, path)
        try:
            return KeyFileResult(path=path, content=self.client.get_text(url))
        except RemoteFetchError as exc:
            self.logger.debug("%s@%s unavailable for %s: %s", path, branch, identity.slug, exc)
            return KeyFileResult(path=path)


__all__ = [
    "ENTRY_POINT_CHAR_LIMIT",
    "ENTRY_POINT_FILES",
    "KeyFileFetcher",
    "MANIFEST_CHAR_LIMIT",
    "MANIFEST_FILES",
    "MAX_NESTED_PATHS",
    "MAX_TREE_PATHS",
    "MetadataFetcher",
    "SOURCE_DIRECTORIES",
    "TreeFetcher",
]
