"""Error types surfaced by the documentation pipeline."""

from __future__ import annotations

from typing import Optional


class RepoDocsError(RuntimeError):
    """Base class for fatal pipeline failures.

    ``status_code`` is the HTTP status the service answers with when the
    error escapes the orchestrator.
    """

    status_code = 500


class InvalidInputError(RepoDocsError):
    """Raised when the repository URL is missing or malformed."""

    status_code = 400


class ConfigurationError(RepoDocsError):
    """Raised when required configuration or credentials are unavailable."""


class RemoteFetchError(RepoDocsError):
    """Raised when the hosting or completion API answers with a failure."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class NoResponseError(RepoDocsError):
    """Raised when the completion API returns no message content."""


__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "NoResponseError",
    "RemoteFetchError",
    "RepoDocsError",
]
