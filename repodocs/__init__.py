"""Generate repository documentation from GitHub metadata with a hosted LLM."""

__version__ = "1.0.0"
