"""MCP resources for structured-reasoning.

Resources give read-only access to thought runs and brainstorming sessions:

- thoughts://{run_id}: a thought run with its branch index
- brainstorm://{session_id}: a brainstorming session with its ideas

Example:
    >>> from structured_reasoning.server import mcp
    >>> from structured_reasoning.resources import register_all_resources
    >>> register_all_resources(mcp)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP

from structured_reasoning.resources.session import register_session_resources


def register_all_resources(mcp: FastMCP) -> None:
    """Register all MCP resources with the FastMCP server.

    Args:
        mcp: The FastMCP server instance to register resources with
    """
    register_session_resources(mcp)


__all__ = [
    "register_all_resources",
    "register_session_resources",
]
