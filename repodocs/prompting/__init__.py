"""Prompt assembly and answer parsing."""
