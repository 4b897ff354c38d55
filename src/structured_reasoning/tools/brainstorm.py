"""Brainstorming tools for structured-reasoning.

This module provides the tool functions that start, continue, read and list
brainstorming sessions.
"""

from __future__ import annotations

from typing import Any

from structured_reasoning.tools.base import invoke


async def start_brainstorming(
    topic: str,
    phase: str,
    participants: list[str] | None = None,
) -> dict[str, Any]:
    """Start a brainstorming session.

    Args:
        topic: What the session is about
        phase: Phase to start in (usually ``preparation``)
        participants: Optional participant names

    Returns:
        Response envelope with the new session and suggestions for its phase

    Examples:
        >>> result = await start_brainstorming("Onboarding", "preparation")
        >>> session_id = result["data"]["session"]["id"]
    """
    return await invoke(
        "start_brainstorming",
        topic=topic,
        phase=phase,
        participants=participants,
    )


async def continue_brainstorming(
    session_id: str,
    phase: str,
    *,
    new_idea: str | None = None,
    category: str | None = None,
    idea_id: str | None = None,
    vote_for_idea: str | None = None,
    select_idea: str | None = None,
    action: str | None = None,
) -> dict[str, Any]:
    """Move a session to a phase and apply the idea change that phase allows.

    ideation takes ``new_idea``; clarification takes ``idea_id`` and
    ``category``; evaluation takes ``vote_for_idea``; selection takes
    ``select_idea``; action_planning takes ``idea_id`` and ``action``.
    """
    return await invoke(
        "continue_brainstorming",
        sessionId=session_id,
        phase=phase,
        newIdea=new_idea,
        category=category,
        ideaId=idea_id,
        voteForIdea=vote_for_idea,
        selectIdea=select_idea,
        action=action,
    )


async def get_brainstorm_session(session_id: str) -> dict[str, Any]:
    """Return a brainstorming session with the suggestions for its phase."""
    return await invoke("get_brainstorm_session", sessionId=session_id)


async def list_brainstorm_sessions(limit: int | None = None) -> dict[str, Any]:
    """List brainstorming sessions, most recently updated first."""
    return await invoke("list_brainstorm_sessions", limit=limit)


__all__ = [
    "continue_brainstorming",
    "get_brainstorm_session",
    "list_brainstorm_sessions",
    "start_brainstorming",
]
