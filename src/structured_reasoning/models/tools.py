"""Tool I/O models for the capability surface.

Parameter bags arrive as loose dicts keyed by camelCase protocol names. The
dispatcher validates each bag once into one member of the ``ToolRequest``
discriminated union, so engines only ever see typed requests. Output models
are frozen and serialize back to camelCase.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

from structured_reasoning.models.brainstorm import BrainstormSession
from structured_reasoning.models.core import BrainstormPhase, ThoughtRunStatus


# ============================================================================
# Input Models (Mutable - For Tool Invocations)
# ============================================================================


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SubmitThoughtRequest(_RequestModel):
    """Parameters of the ``submit_thought`` capability.

    Field types are checked here; range and reference checks belong to
    ThoughtGraphEngine because they depend on the run's current state.

    Examples:
        >>> request = SubmitThoughtRequest.model_validate({
        ...     "thought": "Break the problem into parts",
        ...     "thoughtNumber": 1,
        ...     "totalThoughts": 3,
        ...     "nextThoughtNeeded": True,
        ... })
        >>> assert request.thought_number == 1
        >>> assert request.session_id is None
    """

    capability: Literal["submit_thought"] = "submit_thought"
    thought: StrictStr = Field(description="Content of this reasoning step")
    thought_number: StrictInt = Field(description="Number of this thought (1-based)")
    total_thoughts: StrictInt = Field(description="Current estimate of thoughts needed")
    next_thought_needed: StrictBool = Field(description="Whether another thought follows")
    is_revision: StrictBool | None = Field(
        default=None, description="Whether this thought revises an earlier one"
    )
    revises_thought: StrictInt | None = Field(
        default=None, description="Number of the thought being revised"
    )
    branch_from_thought: StrictInt | None = Field(
        default=None, description="Number of the thought this one branches from"
    )
    branch_id: StrictStr | None = Field(default=None, description="Branch identifier")
    needs_more_thoughts: StrictBool | None = Field(
        default=None, description="Request more thoughts past the current estimate"
    )
    session_id: StrictStr | None = Field(
        default=None, description="Thought run to append to (defaults to the shared run)"
    )


class StartBrainstormingRequest(_RequestModel):
    """Parameters of the ``start_brainstorming`` capability."""

    capability: Literal["start_brainstorming"] = "start_brainstorming"
    topic: StrictStr = Field(description="Topic of the session")
    phase: StrictStr = Field(description="Phase to start in")
    participants: list[StrictStr] = Field(default_factory=list, description="Participant names")


class ContinueBrainstormingRequest(_RequestModel):
    """Parameters of the ``continue_brainstorming`` capability.

    Which mutation fields matter depends on ``phase``; the rest are ignored
    unless strict mutation checking is enabled.
    """

    capability: Literal["continue_brainstorming"] = "continue_brainstorming"
    session_id: StrictStr | None = Field(
        default=None, description="Session to continue; a missing id is reported as not found"
    )
    phase: StrictStr = Field(description="Phase the session moves to")
    new_idea: StrictStr | None = Field(default=None, description="Idea text (ideation)")
    category: StrictStr | None = Field(default=None, description="Category (clarification)")
    idea_id: StrictStr | None = Field(
        default=None, description="Target idea (clarification, action_planning)"
    )
    vote_for_idea: StrictStr | None = Field(default=None, description="Idea to vote for (evaluation)")
    select_idea: StrictStr | None = Field(default=None, description="Idea to select (selection)")
    action: StrictStr | None = Field(default=None, description="Action text (action_planning)")


class GetThoughtRunRequest(_RequestModel):
    """Parameters of the ``get_thought_run`` capability."""

    capability: Literal["get_thought_run"] = "get_thought_run"
    session_id: StrictStr | None = Field(default=None, description="Run to read")


class GetBrainstormSessionRequest(_RequestModel):
    """Parameters of the ``get_brainstorm_session`` capability."""

    capability: Literal["get_brainstorm_session"] = "get_brainstorm_session"
    session_id: StrictStr = Field(description="Session to read")


class ListBrainstormSessionsRequest(_RequestModel):
    """Parameters of the ``list_brainstorm_sessions`` capability."""

    capability: Literal["list_brainstorm_sessions"] = "list_brainstorm_sessions"
    limit: StrictInt = Field(default=100, ge=1, description="Maximum sessions to return")


ToolRequest = Annotated[
    SubmitThoughtRequest
    | StartBrainstormingRequest
    | ContinueBrainstormingRequest
    | GetThoughtRunRequest
    | GetBrainstormSessionRequest
    | ListBrainstormSessionsRequest,
    Field(discriminator="capability"),
]


# ============================================================================
# Output Models (Frozen - Immutable Results)
# ============================================================================


class _OutputModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON-compatible dict clients receive."""
        return self.model_dump(mode="json", by_alias=True)


class ThoughtOutput(_OutputModel):
    """Result of a successful ``submit_thought`` call.

    Examples:
        >>> output = ThoughtOutput(
        ...     run_id="default",
        ...     thought_number=1,
        ...     total_thoughts=3,
        ...     next_thought_needed=True,
        ...     branches=[],
        ...     thought_history_length=1,
        ...     status=ThoughtRunStatus.IN_PROGRESS,
        ... )
        >>> assert output.to_payload()["thoughtHistoryLength"] == 1
    """

    run_id: str = Field(description="Thought run the thought was appended to")
    thought_number: int = Field(description="Id assigned to the new thought")
    total_thoughts: int = Field(description="Run-wide estimate after this thought")
    next_thought_needed: bool = Field(description="Whether the run continues")
    branches: list[str] = Field(description="Distinct branch ids seen so far")
    thought_history_length: int = Field(description="Number of thoughts in the run")
    is_revision: bool = Field(default=False)
    is_branch: bool = Field(default=False)
    status: ThoughtRunStatus = Field(description="Derived run status")
    suggested_next_steps: list[str] = Field(default_factory=list)
    formatted: str = Field(default="", description="Human-readable rendering of the thought")
    timestamp: datetime = Field(default_factory=datetime.now)


class ThoughtRunOutput(_OutputModel):
    """Snapshot of a thought run."""

    run_id: str
    total_thoughts: int
    thought_history_length: int
    branches: dict[str, list[int]]
    status: ThoughtRunStatus
    thoughts: list[dict[str, Any]] = Field(default_factory=list)


class BrainstormOutput(_OutputModel):
    """Result of ``start_brainstorming`` and ``continue_brainstorming``."""

    session: BrainstormSession = Field(description="Copy of the session after the call")
    next_steps: list[str] = Field(description="Suggestions for the current phase")
    applied_mutation: str | None = Field(
        default=None,
        description="Name of the idea mutation that took effect, or None for a no-op",
    )
    formatted: str = Field(default="", description="Human-readable session summary")
    timestamp: datetime = Field(default_factory=datetime.now)


class BrainstormSummary(_OutputModel):
    """Compact listing entry for a brainstorming session."""

    session_id: str
    topic: str
    phase: BrainstormPhase
    idea_count: int
    selected_count: int
    updated_at: datetime


class ToolResponse(BaseModel):
    """Envelope returned for every capability call.

    Examples:
        >>> ToolResponse.ok({"a": 1}).to_payload()
        {'success': True, 'data': {'a': 1}}
        >>> ToolResponse.fail("Valid session ID is required").to_payload()
        {'success': False, 'error': 'Valid session ID is required'}
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: dict[str, Any]) -> ToolResponse:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> ToolResponse:
        return cls(success=False, error=error)

    def to_payload(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": self.data if self.data is not None else {}}
        return {"success": False, "error": self.error or "Unknown error"}


__all__ = [
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
