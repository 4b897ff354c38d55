"""Sequential thinking tools for structured-reasoning.

This module provides the tool functions that append thoughts to a thought run
and read a run back.
"""

from __future__ import annotations

from typing import Any

from structured_reasoning.tools.base import invoke


async def submit_thought(
    thought: str,
    thought_number: int,
    total_thoughts: int,
    next_thought_needed: bool,
    *,
    is_revision: bool | None = None,
    revises_thought: int | None = None,
    branch_from_thought: int | None = None,
    branch_id: str | None = None,
    needs_more_thoughts: bool | None = None,
    session_id: str | None = None,
) -> dict[str, Any]:
    """Append one thought to a thought run.

    Args:
        thought: Content of this reasoning step
        thought_number: Number of this thought; must be the next in sequence
        total_thoughts: Current estimate of thoughts needed
        next_thought_needed: Whether another thought follows
        is_revision: Whether this thought revises an earlier one
        revises_thought: Number of the thought being revised
        branch_from_thought: Number of the thought this one branches from
        branch_id: Identifier of the branch
        needs_more_thoughts: Request more thoughts past the estimate
        session_id: Thought run to append to; the shared run when omitted

    Returns:
        Response envelope with the thought run summary or an error message

    Examples:
        >>> result = await submit_thought("Frame the problem", 1, 3, True)
        >>> assert result["success"] is True
        >>> assert result["data"]["thoughtHistoryLength"] == 1
    """
    return await invoke(
        "submit_thought",
        thought=thought,
        thoughtNumber=thought_number,
        totalThoughts=total_thoughts,
        nextThoughtNeeded=next_thought_needed,
        isRevision=is_revision,
        revisesThought=revises_thought,
        branchFromThought=branch_from_thought,
        branchId=branch_id,
        needsMoreThoughts=needs_more_thoughts,
        sessionId=session_id,
    )


async def get_thought_run(session_id: str | None = None) -> dict[str, Any]:
    """Return every thought of a run together with its branch index.

    Args:
        session_id: Thought run to read; the shared run when omitted

    Returns:
        Response envelope with the run snapshot, or an error if the run does
        not exist yet
    """
    return await invoke("get_thought_run", sessionId=session_id)


__all__ = ["get_thought_run", "submit_thought"]
