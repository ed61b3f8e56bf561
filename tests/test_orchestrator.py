"""Tests for repodocs.orchestrator."""

from __future__ import annotations

import json

import pytest

from repodocs.config import RepoDocsConfig
from repodocs.errors import ConfigurationError, InvalidInputError, RemoteFetchError
from repodocs.llm.runner import CompletionRunner
from repodocs.orchestrator import INVALID_URL_MESSAGE, MISSING_URL_MESSAGE, Orchestrator
from tests._fixtures.hosting import API, RAW, FakeHostingClient, dir_entry, file_entry

WIDGET_METADATA = {
    "name": "widget",
    "description": "",
    "language": None,
    "stargazers_count": 42,
}


class RecordingCompletion:
    """Captures completion requests and replays a canned answer or error."""

    def __init__(self, answer: str | Exception) -> None:
        self.answer = answer
        self.requests: list = []

    def __call__(self, request) -> str:
        self.requests.append(request)
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer


def _orchestrator(client: FakeHostingClient, completion: RecordingCompletion, *, api_key: str | None = "key") -> Orchestrator:
    config = RepoDocsConfig()
    runner = CompletionRunner(config.llm, api_key_provider=lambda: api_key, runner=completion)
    return Orchestrator(config, client=client, completion_runner=runner)


def test_run_generates_documents_from_repository_context() -> None:
    client = FakeHostingClient(
        {
            f"{API}/repos/acme/widget": {**WIDGET_METADATA, "language": "TypeScript"},
            f"{API}/repos/acme/widget/contents": [file_entry("package.json"), dir_entry("src")],
            f"{API}/repos/acme/widget/contents/src": [file_entry("src/index.ts")],
            f"{RAW}/acme/widget/main/package.json": '{"name": "widget"}',
            f"{RAW}/acme/widget/main/src/index.ts": "export const widget = 1;",
        }
    )
    answer = {"readme": "# Widget", "gettingStarted": "# Start", "apiDocs": "# API"}
    completion = RecordingCompletion(f"```json\n{json.dumps(answer)}\n```")

    result = _orchestrator(client, completion).run("https://github.com/acme/widget")

    assert result.to_dict() == {
        "readme": "# Widget",
        "gettingStarted": "# Start",
        "apiDocs": "# API",
        "repoInfo": {
            "name": "widget",
            "description": "",
            "language": "TypeScript",
            "stars": 42,
            "files": ["package.json", "src/index.ts"],
        },
    }
    prompt = completion.requests[0].messages[1].content
    assert "src/index.ts" in prompt
    assert '--- package.json ---\n{"name": "widget"}' in prompt
    assert "--- src/index.ts ---\nexport const widget = 1;" in prompt


def test_run_with_empty_listing_reports_defaults() -> None:
    client = FakeHostingClient(
        {
            f"{API}/repos/acme/widget": WIDGET_METADATA,
            f"{API}/repos/acme/widget/contents": [],
        }
    )
    completion = RecordingCompletion("not json at all")

    result = _orchestrator(client, completion).run("https://github.com/acme/widget")

    assert result.repository.to_dict() == {
        "name": "widget",
        "description": "",
        "language": "Unknown",
        "stars": 42,
        "files": [],
    }
    assert result.documents.readme == "not json at all"


def test_completion_failure_is_fatal_even_with_degraded_context() -> None:
    client = FakeHostingClient(
        {
            f"{API}/repos/acme/widget": WIDGET_METADATA,
            f"{API}/repos/acme/widget/contents": [],
        }
    )
    completion = RecordingCompletion(RemoteFetchError("Completion API error: overloaded", status=503))

    with pytest.raises(RemoteFetchError) as excinfo:
        _orchestrator(client, completion).run("https://github.com/acme/widget")

    assert excinfo.value.status_code == 500
    assert len(completion.requests) == 1


def test_invalid_url_makes_no_outbound_calls() -> None:
    client = FakeHostingClient()
    completion = RecordingCompletion("unused")

    with pytest.raises(InvalidInputError) as excinfo:
        _orchestrator(client, completion).run("not-a-url")

    assert str(excinfo.value) == INVALID_URL_MESSAGE
    assert excinfo.value.status_code == 400
    assert client.calls == []
    assert completion.requests == []


@pytest.mark.parametrize("repo_url", [None, "", "   "])
def test_missing_url_is_rejected(repo_url) -> None:
    client = FakeHostingClient()

    with pytest.raises(InvalidInputError, match=MISSING_URL_MESSAGE):
        _orchestrator(client, RecordingCompletion("unused")).run(repo_url)

    assert client.calls == []


def test_metadata_failure_stops_pipeline() -> None:
    client = FakeHostingClient({f"{API}/repos/acme/widget": 404})
    completion = RecordingCompletion("unused")

    with pytest.raises(RemoteFetchError, match="Failed to fetch repo"):
        _orchestrator(client, completion).run("git@github.com:acme/widget.git")

    assert client.urls == [f"{API}/repos/acme/widget"]
    assert completion.requests == []


def test_missing_completion_key_is_configuration_error() -> None:
    client = FakeHostingClient({f"{API}/repos/acme/widget": WIDGET_METADATA})
    completion = RecordingCompletion("unused")

    with pytest.raises(ConfigurationError):
        _orchestrator(client, completion, api_key=None).run("https://github.com/acme/widget")

    assert completion.requests == []


def test_browser_url_with_query_requests_plain_repository() -> None:
    client = FakeHostingClient(
        {
            f"{API}/repos/acme/widget": WIDGET_METADATA,
            f"{API}/repos/acme/widget/contents": [],
        }
    )
    completion = RecordingCompletion('{"readme": "# Widget"}')

    result = _orchestrator(client, completion).run("https://github.com/acme/widget?tab=readme-ov-file#readme")

    assert result.repository.name == "widget"
    assert client.urls[0] == f"{API}/repos/acme/widget"
