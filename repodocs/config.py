"""Configuration loading for repodocs (.repodocs.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = ".repodocs.yml"

ENV_GITHUB_TOKEN_KEYS = ("REPODOCS_GITHUB_TOKEN", "GITHUB_TOKEN", "GH_TOKEN")
ENV_LLM_API_KEY_KEYS = ("REPODOCS_LLM_API_KEY", "GROQ_API_KEY")
ENV_LLM_MODEL_KEYS = ("REPODOCS_LLM_MODEL",)
ENV_LLM_BASE_URL_KEYS = ("REPODOCS_LLM_BASE_URL",)


@dataclass
class GitHubConfig:
    """Hosting API endpoints and transport settings."""

    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    request_timeout: float = 15.0


@dataclass
class LLMConfig:
    """Completion API settings."""

    base_url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.3
    max_tokens: int = 4000
    request_timeout: float = 60.0


@dataclass
class RepoDocsConfig:
    """Represents the settings defined in .repodocs.yml."""

    github: GitHubConfig = field(default_factory=GitHubConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    source: Optional[Path] = None


def load_config(config_path: Path | None = None) -> RepoDocsConfig:
    """Load configuration from disk, applying environment overrides."""
    config = RepoDocsConfig()
    config_file = _resolve_config_path(config_path or Path.cwd())

    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigurationError(f"{config_file.name} must contain a mapping at the root")
        _apply_github(config.github, _as_dict(data.get("github")))
        _apply_llm(config.llm, _as_dict(data.get("llm")))
        config.source = config_file

    model = first_env_value(ENV_LLM_MODEL_KEYS)
    if model:
        config.llm.model = model
    base_url = first_env_value(ENV_LLM_BASE_URL_KEYS)
    if base_url:
        config.llm.base_url = base_url
    return config


def github_token() -> Optional[str]:
    """Return the optional hosting API token from the environment."""
    return first_env_value(ENV_GITHUB_TOKEN_KEYS)


def llm_api_key() -> Optional[str]:
    """Return the completion API key from the environment, if set."""
    return first_env_value(ENV_LLM_API_KEY_KEYS)


def first_env_value(keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _apply_github(target: GitHubConfig, data: Dict[str, Any]) -> None:
    api_url = _as_str(data.get("api_url"))
    if api_url:
        target.api_url = api_url.rstrip("/")
    raw_url = _as_str(data.get("raw_url"))
    if raw_url:
        target.raw_url = raw_url.rstrip("/")
    timeout = _as_float(data.get("request_timeout"))
    if timeout is not None:
        target.request_timeout = timeout


def _apply_llm(target: LLMConfig, data: Dict[str, Any]) -> None:
    base_url = _as_str(data.get("base_url"))
    if base_url:
        target.base_url = base_url.rstrip("/")
    model = _as_str(data.get("model"))
    if model:
        target.model = model
    temperature = _as_float(data.get("temperature"))
    if temperature is not None:
        target.temperature = temperature
    max_tokens = _as_int(data.get("max_tokens"))
    if max_tokens is not None:
        target.max_tokens = max_tokens
    timeout = _as_float(data.get("request_timeout"))
    if timeout is not None:
        target.request_timeout = timeout


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "GitHubConfig",
    "LLMConfig",
    "RepoDocsConfig",
    "github_token",
    "llm_api_key",
    "load_config",
]
