"""Tool registration for FastMCP server.

This module provides the register_tools() function to expose all MCP tools
via the FastMCP server instance. Tool parameters use the camelCase names of
the wire protocol; each tool delegates to its implementation in
``structured_reasoning.tools`` and returns the response envelope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from fastmcp import FastMCP


def register_tools(mcp: FastMCP) -> None:
    """Register all MCP tools with the FastMCP server instance.

    This function registers the following tools:
    - submit_thought: Append a thought to a sequential thought run
    - get_thought_run: Read a thought run back
    - start_brainstorming: Start a brainstorming session
    - continue_brainstorming: Advance a session and change one idea
    - get_brainstorm_session: Read a brainstorming session
    - list_brainstorm_sessions: List brainstorming sessions

    Args:
        mcp: The FastMCP server instance to register tools with
    """
    # Import tools here to avoid circular imports
    from structured_reasoning.tools.brainstorm import (
        continue_brainstorming as continue_brainstorming_impl,
    )
    from structured_reasoning.tools.brainstorm import (
        get_brainstorm_session as get_brainstorm_session_impl,
    )
    from structured_reasoning.tools.brainstorm import (
        list_brainstorm_sessions as list_brainstorm_sessions_impl,
    )
    from structured_reasoning.tools.brainstorm import (
        start_brainstorming as start_brainstorming_impl,
    )
    from structured_reasoning.tools.thinking import (
        get_thought_run as get_thought_run_impl,
    )
    from structured_reasoning.tools.thinking import (
        submit_thought as submit_thought_impl,
    )

    @mcp.tool(
        title="Submit Thought",
        description=(
            "Append one step to a sequential thought run. Thoughts are numbered "
            "from 1 in order; a thought may revise an earlier one or branch from it."
        ),
        tags={"thinking"},
    )
    async def submit_thought(
        thought: str,
        thoughtNumber: int,  # noqa: N803
        totalThoughts: int,  # noqa: N803
        nextThoughtNeeded: bool,  # noqa: N803
        isRevision: bool | None = None,  # noqa: N803
        revisesThought: int | None = None,  # noqa: N803
        branchFromThought: int | None = None,  # noqa: N803
        branchId: str | None = None,  # noqa: N803
        needsMoreThoughts: bool | None = None,  # noqa: N803
        sessionId: str | None = None,  # noqa: N803
    ) -> dict[str, Any]:
        """Append one step to a sequential thought run."""
        return await submit_thought_impl(
            thought,
            thoughtNumber,
            totalThoughts,
            nextThoughtNeeded,
            is_revision=isRevision,
            revises_thought=revisesThought,
            branch_from_thought=branchFromThought,
            branch_id=branchId,
            needs_more_thoughts=needsMoreThoughts,
            session_id=sessionId,
        )

    @mcp.tool(
        title="Get Thought Run",
        description="Return every thought of a run together with its branch index",
        tags={"inspection"},
    )
    async def get_thought_run(sessionId: str | None = None) -> dict[str, Any]:  # noqa: N803
        """Return a thought run snapshot."""
        return await get_thought_run_impl(sessionId)

    @mcp.tool(
        title="Start Brainstorming",
        description=(
            "Start a brainstorming session. Phases: preparation, ideation, "
            "clarification, evaluation, selection, action_planning."
        ),
        tags={"brainstorming"},
    )
    async def start_brainstorming(
        topic: str,
        phase: str,
        participants: list[str] | None = None,
    ) -> dict[str, Any]:
        """Start a brainstorming session."""
        return await start_brainstorming_impl(topic, phase, participants)

    @mcp.tool(
        title="Continue Brainstorming",
        description=(
            "Move a brainstorming session to a phase and apply the idea change "
            "that phase allows: newIdea (ideation), ideaId + category "
            "(clarification), voteForIdea (evaluation), selectIdea (selection), "
            "ideaId + action (action_planning)."
        ),
        tags={"brainstorming"},
    )
    async def continue_brainstorming(
        sessionId: str,  # noqa: N803
        phase: str,
        newIdea: str | None = None,  # noqa: N803
        category: str | None = None,
        ideaId: str | None = None,  # noqa: N803
        voteForIdea: str | None = None,  # noqa: N803
        selectIdea: str | None = None,  # noqa: N803
        action: str | None = None,
    ) -> dict[str, Any]:
        """Advance a brainstorming session."""
        return await continue_brainstorming_impl(
            sessionId,
            phase,
            new_idea=newIdea,
            category=category,
            idea_id=ideaId,
            vote_for_idea=voteForIdea,
            select_idea=selectIdea,
            action=action,
        )

    @mcp.tool(
        title="Get Brainstorming Session",
        description="Return a brainstorming session with the suggestions for its phase",
        tags={"inspection"},
    )
    async def get_brainstorm_session(sessionId: str) -> dict[str, Any]:  # noqa: N803
        """Return a brainstorming session."""
        return await get_brainstorm_session_impl(sessionId)

    @mcp.tool(
        title="List Brainstorming Sessions",
        description="List brainstorming sessions, most recently updated first",
        tags={"inspection"},
    )
    async def list_brainstorm_sessions(limit: int | None = None) -> dict[str, Any]:
        """List brainstorming sessions."""
        return await list_brainstorm_sessions_impl(limit)


__all__ = ["register_tools"]
