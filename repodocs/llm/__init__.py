"""Hosted completion API adapters."""

from .runner import CompletionRequest, CompletionRunner

__all__ = ["CompletionRequest", "CompletionRunner"]
