"""Brainstorming phase engine.

BrainstormPhaseEngine moves a session between phases and applies the one idea
mutation that the requested phase allows. By default the engine is
permissive: unknown idea ids and fields that the phase does not consume are
ignored and the call still succeeds with the session unchanged. Strict
mutation checking and forward-only phase order are opt-in.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from structured_reasoning.models.brainstorm import BrainstormSession, Idea
from structured_reasoning.models.core import BrainstormPhase
from structured_reasoning.models.tools import (
    BrainstormOutput,
    BrainstormSummary,
    ContinueBrainstormingRequest,
    StartBrainstormingRequest,
)
from structured_reasoning.sessions import SessionDirectory
from structured_reasoning.utils.formatting import format_session
from structured_reasoning.utils.validation import (
    MAX_INPUT_LENGTH,
    NotFoundError,
    ValidationError,
    optional_text,
    require_text,
)

logger = structlog.get_logger(__name__)

NEXT_STEPS: dict[BrainstormPhase, list[str]] = {
    BrainstormPhase.PREPARATION: [
        "Define the problem or opportunity clearly",
        "Set the scope and desired outcomes",
        "Move to ideation phase when ready",
    ],
    BrainstormPhase.IDEATION: [
        "Generate as many ideas as possible",
        "Focus on quantity over quality at this stage",
        "Avoid judgment or criticism of ideas",
        "Build on others' ideas",
        "Move to clarification phase when idea generation slows",
    ],
    BrainstormPhase.CLARIFICATION: [
        "Group similar ideas into categories",
        "Clarify any ideas that are ambiguous",
        "Remove duplicates",
        "Move to evaluation phase when ideas are organized",
    ],
    BrainstormPhase.EVALUATION: [
        "Vote on the most promising ideas",
        "Assess feasibility and impact",
        "Move to selection phase after voting",
    ],
    BrainstormPhase.SELECTION: [
        "Select ideas for implementation based on votes and criteria",
        "Move to action planning phase for selected ideas",
    ],
    BrainstormPhase.ACTION_PLANNING: [
        "Define specific actions for implementing selected ideas",
        "Assign responsibilities",
        "Set timelines",
        "Determine how to measure success",
    ],
}

# Mutation fields each phase consumes, as (attribute, protocol name)
PHASE_FIELDS: dict[BrainstormPhase, tuple[tuple[str, str], ...]] = {
    BrainstormPhase.PREPARATION: (),
    BrainstormPhase.IDEATION: (("new_idea", "newIdea"),),
    BrainstormPhase.CLARIFICATION: (("idea_id", "ideaId"), ("category", "category")),
    BrainstormPhase.EVALUATION: (("vote_for_idea", "voteForIdea"),),
    BrainstormPhase.SELECTION: (("select_idea", "selectIdea"),),
    BrainstormPhase.ACTION_PLANNING: (("idea_id", "ideaId"), ("action", "action")),
}
_ALL_FIELDS = {field for fields in PHASE_FIELDS.values() for field in fields}

Mutation = Callable[[], Idea]


def parse_phase(value: str) -> BrainstormPhase:
    """Convert a phase name into a BrainstormPhase.

    Raises:
        ValidationError: If the name is not one of the six phases
    """
    try:
        return BrainstormPhase(value.strip().lower())
    except ValueError as e:
        allowed = ", ".join(p.value for p in BrainstormPhase)
        raise ValidationError(f"Unknown phase '{value}'. Expected one of: {allowed}") from e


class BrainstormPhaseEngine:
    """Drives brainstorming sessions held by a SessionDirectory.

    Examples:
        >>> engine = BrainstormPhaseEngine(SessionDirectory())
        >>> started = await engine.start_session(StartBrainstormingRequest(
        ...     topic="UX improvements", phase="preparation"
        ... ))
        >>> continued = await engine.continue_session(ContinueBrainstormingRequest(
        ...     session_id=started.session.id, phase="ideation", new_idea="Add dark mode"
        ... ))
        >>> assert continued.applied_mutation == "add_idea"
    """

    def __init__(
        self,
        directory: SessionDirectory,
        *,
        strict_mutations: bool = False,
        enforce_phase_order: bool = False,
        max_input_length: int = MAX_INPUT_LENGTH,
    ) -> None:
        self.directory = directory
        self.strict_mutations = strict_mutations
        self.enforce_phase_order = enforce_phase_order
        self.max_input_length = max_input_length

    async def start_session(self, request: StartBrainstormingRequest) -> BrainstormOutput:
        """Create a brainstorming session.

        Raises:
            ValidationError: If topic or phase is missing, or phase is unknown
            SessionLimitError: If the directory is full
        """
        topic = require_text(
            request.topic,
            "topic",
            max_chars=self.max_input_length,
            message="Topic is required for starting a brainstorming session",
        )
        phase = parse_phase(
            require_text(
                request.phase,
                "phase",
                message="Phase is required for starting a brainstorming session",
            )
        )
        participants = [
            name
            for name in (
                optional_text(p, "participants", max_chars=self.max_input_length)
                for p in request.participants
            )
            if name is not None
        ]

        session = await self.directory.create_brainstorm(topic, phase, participants)
        async with self.directory.exclusive(session.id):
            logger.info(
                "brainstorm_started",
                session_id=session.id,
                phase=str(phase),
                participants=len(session.participants),
            )
            return self._output(session, applied=None)

    async def continue_session(self, request: ContinueBrainstormingRequest) -> BrainstormOutput:
        """Move a session to a phase and apply the mutation that phase allows.

        Only the matching combination of phase and mutation fields has an
        effect. Mismatched combinations and unknown idea ids are no-ops unless
        strict mutation checking is on.

        Raises:
            NotFoundError: If the session id is missing or unknown
            ValidationError: If the phase is unknown, or a strict check fails
        """
        session_id = (request.session_id or "").strip()
        if not session_id:
            raise NotFoundError("Brainstorming session", None)
        session = await self.directory.require_brainstorm(session_id)
        phase = parse_phase(require_text(request.phase, "phase", message="Phase is required"))

        async with self.directory.exclusive(session.id):
            if self.enforce_phase_order and phase.order < session.phase.order:
                raise ValidationError(
                    f"Cannot move from phase '{session.phase}' back to '{phase}'"
                )
            mutation = self._plan_mutation(session, phase, request)

            applied = None
            if mutation is not None:
                applied, apply = mutation
                idea = apply()
                logger.info(
                    "brainstorm_idea_updated",
                    session_id=session.id,
                    mutation=applied,
                    idea_id=idea.id,
                )
            previous = session.phase
            session.phase = phase
            session.touch()
            logger.info(
                "brainstorm_continued",
                session_id=session.id,
                from_phase=str(previous),
                to_phase=str(phase),
                applied=applied,
            )
            return self._output(session, applied=applied)

    def _plan_mutation(
        self,
        session: BrainstormSession,
        phase: BrainstormPhase,
        request: ContinueBrainstormingRequest,
    ) -> tuple[str, Mutation] | None:
        """Work out the mutation to apply without touching the session."""
        values = {
            attr: optional_text(getattr(request, attr), name, max_chars=self.max_input_length)
            for attr, name in _ALL_FIELDS
        }
        if self.strict_mutations:
            consumed = {attr for attr, _ in PHASE_FIELDS[phase]}
            for attr, name in sorted(_ALL_FIELDS):
                if values[attr] is not None and attr not in consumed:
                    raise ValidationError(f"{name} has no effect in phase '{phase}'")

        if phase == BrainstormPhase.IDEATION:
            text = values["new_idea"]
            if text is None:
                return self._incomplete(phase, values)
            idea = session.new_idea(text)
            return "add_idea", lambda: session.add_idea(idea)

        if phase == BrainstormPhase.CLARIFICATION:
            category = values["category"]
            if values["idea_id"] is None or category is None:
                return self._incomplete(phase, values)
            idea = self._resolve(session, values["idea_id"])
            return None if idea is None else ("categorize", lambda: idea.categorize(category))

        if phase == BrainstormPhase.EVALUATION:
            if values["vote_for_idea"] is None:
                return self._incomplete(phase, values)
            idea = self._resolve(session, values["vote_for_idea"])
            return None if idea is None else ("vote", idea.vote)

        if phase == BrainstormPhase.SELECTION:
            if values["select_idea"] is None:
                return self._incomplete(phase, values)
            idea = self._resolve(session, values["select_idea"])
            return None if idea is None else ("select", idea.select)

        if phase == BrainstormPhase.ACTION_PLANNING:
            action = values["action"]
            if values["idea_id"] is None or action is None:
                return self._incomplete(phase, values)
            idea = self._resolve(session, values["idea_id"])
            return None if idea is None else ("add_action", lambda: idea.add_action(action))

        return None

    def _incomplete(self, phase: BrainstormPhase, values: dict[str, str | None]) -> None:
        # A bare phase change is always accepted
        given = [name for attr, name in PHASE_FIELDS[phase] if values[attr] is not None]
        if given and self.strict_mutations:
            needed = " and ".join(name for _, name in PHASE_FIELDS[phase])
            raise ValidationError(f"Phase '{phase}' needs {needed} together")
        return None

    def _resolve(self, session: BrainstormSession, idea_id: str) -> Idea | None:
        idea = session.find_idea(idea_id)
        if idea is None:
            if self.strict_mutations:
                raise ValidationError(f"Idea not found in session {session.id}: {idea_id}")
            logger.debug("brainstorm_idea_missing", session_id=session.id, idea_id=idea_id)
        return idea

    def _output(self, session: BrainstormSession, applied: str | None) -> BrainstormOutput:
        formatted = format_session(session)
        logger.debug("brainstorm_rendered", session_id=session.id, text=formatted)
        return BrainstormOutput(
            session=session.model_copy(deep=True),
            next_steps=list(NEXT_STEPS[session.phase]),
            applied_mutation=applied,
            formatted=formatted,
            timestamp=session.updated_at,
        )

    async def get_session(self, session_id: str) -> BrainstormOutput:
        """Return a copy of a session with its phase suggestions.

        Raises:
            NotFoundError: If the session does not exist
        """
        session = await self.directory.require_brainstorm(session_id)
        async with self.directory.exclusive(session.id):
            return self._output(session, applied=None)

    async def list_sessions(self, *, limit: int = 100) -> list[BrainstormSummary]:
        """Summarize sessions, most recently updated first."""
        sessions = await self.directory.list_brainstorms(limit=limit)
        return [
            BrainstormSummary(
                session_id=s.id,
                topic=s.topic,
                phase=s.phase,
                idea_count=s.idea_count,
                selected_count=len(s.selected_ideas),
                updated_at=s.updated_at,
            )
            for s in sessions
        ]


__all__ = [
    "NEXT_STEPS",
    "PHASE_FIELDS",
    "BrainstormPhaseEngine",
    "parse_phase",
]
