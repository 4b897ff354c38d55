"""Tools module for structured-reasoning.

This module contains MCP tool functions for sequential thinking and
brainstorming sessions.
"""

from structured_reasoning.tools.brainstorm import (
    continue_brainstorming,
    get_brainstorm_session,
    list_brainstorm_sessions,
    start_brainstorming,
)
from structured_reasoning.tools.register import register_tools
from structured_reasoning.tools.thinking import get_thought_run, submit_thought

__all__ = [
    # Sequential thinking
    "submit_thought",
    "get_thought_run",
    # Brainstorming
    "start_brainstorming",
    "continue_brainstorming",
    "get_brainstorm_session",
    "list_brainstorm_sessions",
    # Registration
    "register_tools",
]
