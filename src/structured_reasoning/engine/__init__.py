"""Session engines.

This package provides the two engines that own the reasoning semantics:
sequential thought runs and phased brainstorming sessions.
"""

from structured_reasoning.engine.brainstorm import (
    NEXT_STEPS,
    BrainstormPhaseEngine,
    parse_phase,
)
from structured_reasoning.engine.thought_graph import (
    COMPLETED_NEXT_STEPS,
    IN_PROGRESS_NEXT_STEPS,
    ThoughtGraphEngine,
)

__all__ = [
    "BrainstormPhaseEngine",
    "COMPLETED_NEXT_STEPS",
    "IN_PROGRESS_NEXT_STEPS",
    "NEXT_STEPS",
    "ThoughtGraphEngine",
    "parse_phase",
]
