"""Builds documentation prompts and parses the model's answer."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from jinja2 import Environment, FileSystemLoader

from ..failsafe import build_document_set, build_unstructured_document_set
from ..models import GeneratedDocumentSet, KeyFileContent, RepositoryMetadata

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass(frozen=True)
class PromptMessage:
    """Represents a single chat message for LLM prompting."""

    role: str
    content: str


class PromptBuilder:
    """Assembles the documentation prompt from repository context."""

    SYSTEM_PROMPT = (
        "You are a technical documentation expert. Always respond with valid JSON only."
    )
    TEMPLATE_NAME = "documentation.j2"

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def build(
        self,
        metadata: RepositoryMetadata,
        files: Sequence[str],
        key_files: Sequence[KeyFileContent],
    ) -> List[PromptMessage]:
        """Return the system and user messages for the completion call."""
        return [
            PromptMessage(role="system", content=self.SYSTEM_PROMPT),
            PromptMessage(role="user", content=self.render_prompt(metadata, files, key_files)),
        ]

    def render_prompt(
        self,
        metadata: RepositoryMetadata,
        files: Sequence[str],
        key_files: Sequence[KeyFileContent],
    ) -> str:
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(
            repository=metadata,
            file_list=self.format_file_list(files),
            key_files=self.format_key_files(key_files),
        ).strip()

    @staticmethod
    def format_file_list(files: Sequence[str]) -> str:
        return "\n".join(files)

    @staticmethod
    def format_key_files(key_files: Sequence[KeyFileContent]) -> str:
        return "\n\n".join(f"--- {item.path} ---\n{item.content}" for item in key_files)

    @staticmethod
    def parse(content: str) -> GeneratedDocumentSet:
        """Turn the model answer into documents.

        A fenced code block, when present, is parsed instead of the full text.
        Answers that are not a JSON object are kept verbatim as the README.
        """
        payload = content
        match = _FENCED_BLOCK.search(content)
        if match:
            payload = match.group(1)
        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError:
            return build_unstructured_document_set(content)
        if not isinstance(parsed, dict):
            return build_unstructured_document_set(content)
        return build_document_set(parsed)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(loader=loader, autoescape=False, keep_trailing_newline=False)


__all__ = ["PromptBuilder", "PromptMessage"]
