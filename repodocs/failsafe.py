"""Fallback documents used when the model answer is incomplete."""

from __future__ import annotations

from typing import Any, Mapping

from .models import GeneratedDocumentSet
from .prompting.constants import MISSING_PLACEHOLDERS, UNSTRUCTURED_PLACEHOLDERS


def build_document_set(parsed: Mapping[str, Any]) -> GeneratedDocumentSet:
    """Return documents from a parsed answer, filling gaps with placeholders."""
    return GeneratedDocumentSet(
        readme=_document_or_placeholder(parsed, "readme"),
        getting_started=_document_or_placeholder(parsed, "gettingStarted"),
        api_docs=_document_or_placeholder(parsed, "apiDocs"),
    )


def build_unstructured_document_set(raw: str) -> GeneratedDocumentSet:
    """Keep a non-JSON answer as the README and stub the other documents."""
    return GeneratedDocumentSet(
        readme=raw,
        getting_started=UNSTRUCTURED_PLACEHOLDERS["gettingStarted"],
        api_docs=UNSTRUCTURED_PLACEHOLDERS["apiDocs"],
    )


def _document_or_placeholder(parsed: Mapping[str, Any], key: str) -> str:
    value = parsed.get(key)
    if isinstance(value, str) and value:
        return value
    return MISSING_PLACEHOLDERS[key]


__all__ = ["build_document_set", "build_unstructured_document_set"]
