"""MCP resources for session access.

This module provides read-only MCP resource endpoints for thought runs and
brainstorming sessions. Resources follow the URI patterns:
- thoughts://{run_id} - Returns a thought run as JSON
- brainstorm://{session_id} - Returns a brainstorming session as JSON
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from structured_reasoning.server import AppContext


def register_session_resources(mcp: FastMCP) -> None:
    """Register session-related MCP resources with the server.

    Args:
        mcp: The FastMCP server instance to register resources with
    """

    @mcp.resource("thoughts://{run_id}")
    async def get_thought_run_state(run_id: str) -> str:
        """Get a thought run as JSON.

        Args:
            run_id: Thought run key; ``default`` is the shared run

        Returns:
            JSON string with the run's thoughts, branches and status

        Raises:
            NotFoundError: If the run does not exist
        """
        from structured_reasoning.server import get_app_context

        ctx: AppContext = get_app_context()
        snapshot = await ctx.thought_engine.get_run(run_id)
        return json.dumps(snapshot.to_payload(), indent=2, default=str)

    @mcp.resource("brainstorm://{session_id}")
    async def get_brainstorm_state(session_id: str) -> str:
        """Get a brainstorming session as JSON.

        Raises:
            NotFoundError: If the session does not exist
        """
        from structured_reasoning.server import get_app_context

        ctx: AppContext = get_app_context()
        output = await ctx.brainstorm_engine.get_session(session_id)
        return json.dumps(output.to_payload(), indent=2, default=str)
