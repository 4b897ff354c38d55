"""Data models for structured-reasoning."""

from structured_reasoning.models.brainstorm import BrainstormSession, Idea
from structured_reasoning.models.core import (
    CAPABILITY_ALIASES,
    BrainstormPhase,
    Capability,
    ThoughtRunStatus,
)
from structured_reasoning.models.thought import ThoughtNode, ThoughtRun
from structured_reasoning.models.tools import (
    BrainstormOutput,
    BrainstormSummary,
    ContinueBrainstormingRequest,
    GetBrainstormSessionRequest,
    GetThoughtRunRequest,
    ListBrainstormSessionsRequest,
    StartBrainstormingRequest,
    SubmitThoughtRequest,
    ThoughtOutput,
    ThoughtRunOutput,
    ToolRequest,
    ToolResponse,
)

__all__ = [
    # Core enums
    "BrainstormPhase",
    "CAPABILITY_ALIASES",
    "Capability",
    "ThoughtRunStatus",
    # Thought runs
    "ThoughtNode",
    "ThoughtRun",
    # Brainstorming
    "BrainstormSession",
    "Idea",
    # Tool I/O
    "BrainstormOutput",
    "BrainstormSummary",
    "ContinueBrainstormingRequest",
    "GetBrainstormSessionRequest",
    "GetThoughtRunRequest",
    "ListBrainstormSessionsRequest",
    "StartBrainstormingRequest",
    "SubmitThoughtRequest",
    "ThoughtOutput",
    "ThoughtRunOutput",
    "ToolRequest",
    "ToolResponse",
]
