"""Command-line interface for structured-reasoning."""

from structured_reasoning.cli.main import app, main

__all__ = ["app", "main"]
