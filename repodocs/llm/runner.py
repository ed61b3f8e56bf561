"""Adapter around a hosted OpenAI-compatible chat completion API."""

from __future__ import annotations

import json
from dataclasses import dataclass
from http.client import HTTPException
from typing import Callable, Optional, Sequence
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import LLMConfig, llm_api_key
from ..errors import ConfigurationError, NoResponseError, RemoteFetchError
from ..logging import get_logger
from ..prompting.builder import PromptMessage


@dataclass
class CompletionRequest:
    """Represents a chat completion request for the hosted model."""

    messages: Sequence[PromptMessage]
    model: str
    temperature: Optional[float]
    max_tokens: Optional[int]
    base_url: str
    api_key: str
    request_timeout: Optional[float]


class CompletionRunner:
    """Sends chat prompts to the configured completion endpoint."""

    def __init__(
        self,
        config: LLMConfig | None = None,
        *,
        api_key_provider: Callable[[], Optional[str]] = llm_api_key,
        runner: Callable[[CompletionRequest], str] | None = None,
    ) -> None:
        self.config = config or LLMConfig()
        self._api_key_provider = api_key_provider
        self._runner = runner or self._http_runner
        self.logger = get_logger("llm.runner")

    def run(self, messages: Sequence[PromptMessage]) -> str:
        """Send the messages and return the first choice's content."""
        # The key is resolved per call; a missing key is a configuration fault.
        api_key = self._api_key_provider()
        if not api_key:
            raise ConfigurationError("GROQ_API_KEY not configured")

        request = CompletionRequest(
            messages=messages,
            model=self.config.model,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
            base_url=self.config.base_url.rstrip("/"),
            api_key=api_key,
            request_timeout=self.config.request_timeout,
        )
        self.logger.debug("Requesting completion from %s (model=%s)", request.base_url, request.model)
        return self._runner(request)

    @staticmethod
    def _http_runner(request: CompletionRequest) -> str:
        endpoint = f"{request.base_url}/chat/completions"
        payload: dict[str, object] = {
            "model": request.model,
            "messages": [
                {"role": message.role, "content": message.content}
                for message in request.messages
            ],
        }
        if request.temperature is not None:
            payload["temperature"] = request.temperature
        if request.max_tokens is not None:
            payload["max_tokens"] = request.max_tokens

        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {request.api_key}",
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")
        timeout = request.request_timeout or 60.0

        try:
            with urlopen(http_request, timeout=timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or str(exc.reason)
            raise RemoteFetchError(f"Completion API error: {message}", status=exc.code) from exc
        except URLError as exc:
            raise RemoteFetchError(f"Completion API request failed: {exc.reason}") from exc
        except (OSError, HTTPException) as exc:
            raise RemoteFetchError(f"Completion API request failed: {exc}") from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RemoteFetchError("Completion API returned invalid JSON") from exc

        content = CompletionRunner._extract_content(response_payload)
        if not content:
            raise NoResponseError("No response from completion API")
        return content

    @staticmethod
    def _extract_content(payload: object) -> str:
        if not isinstance(payload, dict):
            return ""
        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")
            if isinstance(content, str):
                return content
        return ""


__all__ = ["CompletionRequest", "CompletionRunner"]
