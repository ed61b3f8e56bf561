"""Tests for repository URL parsing."""

from __future__ import annotations

import pytest

from repodocs.github.url import parse_repo_url
from repodocs.models import RepositoryIdentity


@pytest.mark.parametrize(
    "url",
    [
        "https://github.com/acme/widget",
        "https://github.com/acme/widget.git",
        "http://www.github.com/acme/widget/tree/main/src",
        "github.com/acme/widget",
        "git@github.com:acme/widget.git",
        "  https://github.com/acme/widget  ",
        "https://github.com/acme/widget?tab=readme-ov-file",
        "https://github.com/acme/widget#readme",
        "https://github.com/acme/widget.git?ref=main",
    ],
)
def test_parse_repo_url_accepts_supported_forms(url: str) -> None:
    assert parse_repo_url(url) == RepositoryIdentity(owner="acme", name="widget")


@pytest.mark.parametrize(
    "url",
    ["not-a-url", "", None, "https://gitlab.com/acme/widget", "https://github.com/acme"],
)
def test_parse_repo_url_returns_none_for_unsupported_input(url) -> None:
    assert parse_repo_url(url) is None


def test_identity_slug() -> None:
    assert RepositoryIdentity(owner="acme", name="widget").slug == "acme/widget"
