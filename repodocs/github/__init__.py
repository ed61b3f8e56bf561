"""GitHub hosting API access."""

from .client import HostingClient
from .fetchers import KeyFileFetcher, MetadataFetcher, TreeFetcher
from .url import parse_repo_url

__all__ = [
    "HostingClient",
    "KeyFileFetcher",
    "MetadataFetcher",
    "TreeFetcher",
    "parse_repo_url",
]
