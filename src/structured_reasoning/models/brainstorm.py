"""Brainstorming session models.

This module defines the Idea and BrainstormSession models. A session owns its
ideas exclusively; ideas leave the session only as copies inside response
payloads.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from structured_reasoning.models.core import BrainstormPhase

# Advisory step counts for a freshly started session, keyed by starting phase
TOTAL_STEPS_BY_PHASE: dict[BrainstormPhase, int] = {
    BrainstormPhase.PREPARATION: 3,
    BrainstormPhase.IDEATION: 5,
}
DEFAULT_TOTAL_STEPS = 2


class Idea(BaseModel):
    """A single brainstorming entry.

    ``text`` is set once at creation. ``category`` changes only through a
    clarification-phase action, ``votes`` only grows, ``selected`` only flips
    from False to True, and ``actions`` is append-only.

    Examples:
        >>> idea = Idea(id="idea-1-3f2a9c0b", text="Add dark mode")
        >>> assert idea.votes == 0 and idea.selected is False
        >>> idea.vote().select().add_action("Draft a colour palette")
        >>> assert idea.votes == 1 and idea.actions == ["Draft a colour palette"]
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Identifier unique within the owning session")
    text: str = Field(min_length=1, description="The idea as submitted")
    category: str | None = Field(default=None, description="Category set during clarification")
    votes: int = Field(default=0, ge=0, description="Number of votes received")
    selected: bool = Field(default=False, description="Whether the idea was selected")
    actions: list[str] = Field(default_factory=list, description="Planned actions, in order")

    def categorize(self, category: str) -> Idea:
        self.category = category
        return self

    def vote(self) -> Idea:
        self.votes += 1
        return self

    def select(self) -> Idea:
        self.selected = True
        return self

    def add_action(self, action: str) -> Idea:
        self.actions.append(action)
        return self


class BrainstormSession(BaseModel):
    """Stateful container carrying a topic and its ideas through the phases.

    Examples:
        >>> session = BrainstormSession(
        ...     id="brainstorm-1700000000000-1a2b3c4d",
        ...     topic="UX improvements",
        ...     phase=BrainstormPhase.PREPARATION,
        ... )
        >>> assert session.total_steps == 3
        >>> idea = session.add_idea("Add dark mode")
        >>> assert session.find_idea(idea.id) is idea
        >>> assert session.find_idea("bogus") is None
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Unique session identifier")
    topic: str = Field(min_length=1, description="What the session is about")
    phase: BrainstormPhase = Field(description="Current phase")
    participants: list[str] = Field(
        default_factory=list,
        description="Participant names; duplicates are dropped, order carries no meaning",
    )
    ideas: list[Idea] = Field(default_factory=list, description="Ideas in creation order")
    current_step: int = Field(default=1, ge=1, description="Advisory progress counter")
    total_steps: int = Field(default=0, ge=0, description="Advisory step estimate")
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("participants")
    @classmethod
    def _dedupe_participants(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    def model_post_init(self, __context: object) -> None:
        if self.total_steps == 0:
            self.total_steps = TOTAL_STEPS_BY_PHASE.get(self.phase, DEFAULT_TOTAL_STEPS)

    @property
    def idea_count(self) -> int:
        return len(self.ideas)

    @property
    def selected_ideas(self) -> list[Idea]:
        return [idea for idea in self.ideas if idea.selected]

    def find_idea(self, idea_id: str | None) -> Idea | None:
        """Return the idea with the given id, or None when absent."""
        if idea_id is None:
            return None
        for idea in self.ideas:
            if idea.id == idea_id:
                return idea
        return None

    def new_idea(self, text: str) -> Idea:
        """Build an idea with a session-unique id without adding it."""
        existing = {idea.id for idea in self.ideas}
        idea_id = f"idea-{len(self.ideas) + 1}-{uuid4().hex[:8]}"
        while idea_id in existing:
            idea_id = f"idea-{len(self.ideas) + 1}-{uuid4().hex[:8]}"
        return Idea(id=idea_id, text=text)

    def add_idea(self, text: str | Idea) -> Idea:
        """Append an idea, building it from ``text`` when given a string."""
        idea = self.new_idea(text) if isinstance(text, str) else text
        self.ideas.append(idea)
        return idea

    def touch(self) -> BrainstormSession:
        self.updated_at = datetime.now()
        return self


__all__ = [
    "DEFAULT_TOTAL_STEPS",
    "TOTAL_STEPS_BY_PHASE",
    "BrainstormSession",
    "Idea",
]
