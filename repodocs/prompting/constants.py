"""Shared constants for documentation prompting and fallbacks."""

from __future__ import annotations

DOCUMENT_KEYS: tuple[str, ...] = ("readme", "gettingStarted", "apiDocs")

DOCUMENT_FILENAMES: dict[str, str] = {
    "readme": "README.md",
    "gettingStarted": "GETTING_STARTED.md",
    "apiDocs": "API.md",
}

MISSING_PLACEHOLDERS: dict[str, str] = {
    "readme": "# Documentation\n\nNo README generated.",
    "gettingStarted": "# Getting Started\n\nNo guide generated.",
    "apiDocs": "# API Documentation\n\nNo API docs generated.",
}

UNSTRUCTURED_PLACEHOLDERS: dict[str, str] = {
    "gettingStarted": "# Getting Started\n\nCould not generate structured guide.",
    "apiDocs": "# API Documentation\n\nCould not generate API docs.",
}


__all__ = [
    "DOCUMENT_FILENAMES",
    "DOCUMENT_KEYS",
    "MISSING_PLACEHOLDERS",
    "UNSTRUCTURED_PLACEHOLDERS",
]
