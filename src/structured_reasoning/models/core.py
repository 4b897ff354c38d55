"""Core enumerations for structured-reasoning.

This module defines the enums shared across the session engine: brainstorming
phases, thought run status, and the capability names accepted by the
dispatcher.
"""

from enum import StrEnum


class BrainstormPhase(StrEnum):
    """Phases of a brainstorming session, in their documented order.

    Each phase gates which idea mutation is meaningful during a
    ``continue_brainstorming`` call.
    """

    PREPARATION = "preparation"
    """Frame the problem, scope and desired outcomes."""

    IDEATION = "ideation"
    """Generate ideas; the only phase that adds ideas."""

    CLARIFICATION = "clarification"
    """Group and categorize ideas."""

    EVALUATION = "evaluation"
    """Vote on ideas."""

    SELECTION = "selection"
    """Mark ideas as selected for implementation."""

    ACTION_PLANNING = "action_planning"
    """Attach concrete actions to ideas."""

    @property
    def order(self) -> int:
        """Zero-based position of this phase in the progression."""
        return list(BrainstormPhase).index(self)


class ThoughtRunStatus(StrEnum):
    """Derived status of a sequential thought run."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Capability(StrEnum):
    """Capability names the request dispatcher understands."""

    SUBMIT_THOUGHT = "submit_thought"
    START_BRAINSTORMING = "start_brainstorming"
    CONTINUE_BRAINSTORMING = "continue_brainstorming"
    GET_THOUGHT_RUN = "get_thought_run"
    GET_BRAINSTORM_SESSION = "get_brainstorm_session"
    LIST_BRAINSTORM_SESSIONS = "list_brainstorm_sessions"


# Older clients call the sequential thinking capability by this name
CAPABILITY_ALIASES: dict[str, Capability] = {
    "process_sequential_thought": Capability.SUBMIT_THOUGHT,
}
