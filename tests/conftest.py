from __future__ import annotations

import pytest

from tests._fixtures.hosting import FakeHostingClient


@pytest.fixture
def hosting_client() -> FakeHostingClient:
    """Provide an empty in-memory hosting client; tests register routes."""
    return FakeHostingClient()


@pytest.fixture(autouse=True)
def _isolate_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "REPODOCS_GITHUB_TOKEN",
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "REPODOCS_LLM_API_KEY",
        "GROQ_API_KEY",
        "REPODOCS_LLM_MODEL",
        "REPODOCS_LLM_BASE_URL",
    ):
        monkeypatch.delenv(key, raising=False)
