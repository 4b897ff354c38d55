"""CLI commands for structured-reasoning.

This package contains all command implementations for the CLI.
"""

from structured_reasoning.cli.commands.config import show_config
from structured_reasoning.cli.commands.run import VALID_TRANSPORTS, run_command

__all__ = ["VALID_TRANSPORTS", "run_command", "show_config"]
