"""Sequential thought run data models.

This module defines the data structures behind the sequential thought graph.
ThoughtNode is a single immutable reasoning step; ThoughtRun is the
append-only, branchable chain of nodes that one reasoning session produces.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from structured_reasoning.models.core import ThoughtRunStatus


class ThoughtNode(BaseModel):
    """An immutable node representing one step in a sequential thought run.

    The node id is the thought number: ids start at 1 and increase by one per
    accepted submission. A correction is never an edit; it is a new node whose
    ``revision_of`` points at the node it supersedes. A node that starts an
    alternative path carries ``branch_from`` and ``branch_id``. The two links
    are independent and a node may carry both.

    Examples:
        Create a first thought:
        >>> node = ThoughtNode(
        ...     id=1,
        ...     content="Restate the problem in my own words.",
        ...     total_estimate=5,
        ...     needs_follow_up=True,
        ... )
        >>> assert node.is_revision is False

        Create a revision of thought 1:
        >>> revision = ThoughtNode(
        ...     id=2,
        ...     content="The constraint was misread; the budget is monthly.",
        ...     total_estimate=5,
        ...     needs_follow_up=True,
        ...     revision_of=1,
        ... )
        >>> assert revision.is_revision is True
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int = Field(
        ge=1,
        description="Thought number, unique and sequential within the run",
    )
    content: str = Field(
        min_length=1,
        description="The thought text, treated as opaque content",
    )
    total_estimate: int = Field(
        ge=1,
        description="Estimate of total thoughts needed at the time of this thought",
    )
    needs_follow_up: bool = Field(
        description="Whether the run continues after this thought",
    )
    needs_more_thoughts: bool = Field(
        default=False,
        description="Whether more thoughts were requested past the current estimate",
    )
    revision_of: int | None = Field(
        default=None,
        ge=1,
        description="Id of an earlier thought this one supersedes",
    )
    branch_from: int | None = Field(
        default=None,
        ge=1,
        description="Id of an earlier thought this one branches from",
    )
    branch_id: str | None = Field(
        default=None,
        description="Identifier of the branch this thought starts or continues",
    )
    created_at: datetime = Field(
        default_factory=datetime.now,
        description="Timestamp when this thought was submitted",
    )

    @property
    def is_revision(self) -> bool:
        return self.revision_of is not None

    @property
    def is_branch(self) -> bool:
        return self.branch_from is not None

    @property
    def continues(self) -> bool:
        """Whether the run should continue after this thought."""
        return self.needs_follow_up or self.needs_more_thoughts


class ThoughtRun(BaseModel):
    """Append-only, branchable chain of thoughts for one reasoning session.

    The run validates nothing on its own; ThoughtGraphEngine checks every
    submission against the run before calling ``append``. Nodes are never
    removed or replaced.

    Examples:
        >>> run = ThoughtRun(id="default")
        >>> assert run.next_id == 1
        >>> run.append(ThoughtNode(id=1, content="a", total_estimate=2, needs_follow_up=True))
        >>> assert run.next_id == 2
        >>> assert run.status == ThoughtRunStatus.IN_PROGRESS
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Key of this run in the session directory")
    nodes: list[ThoughtNode] = Field(
        default_factory=list,
        description="Thoughts in submission order; index i holds thought i + 1",
    )
    total_thoughts: int = Field(
        default=1,
        ge=1,
        description="Current estimate of total thoughts (last write wins)",
    )
    branches: dict[str, list[int]] = Field(
        default_factory=dict,
        description="Branch id to the ids of thoughts submitted on that branch",
    )
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def next_id(self) -> int:
        """The only thought number the run will accept next."""
        return len(self.nodes) + 1

    @property
    def last(self) -> ThoughtNode | None:
        return self.nodes[-1] if self.nodes else None

    @property
    def branch_ids(self) -> list[str]:
        """Distinct branch ids in the order they were first seen."""
        return list(self.branches)

    @property
    def is_complete(self) -> bool:
        """True when the most recent thought asked for no follow-up."""
        last = self.last
        return last is not None and not last.continues

    @property
    def status(self) -> ThoughtRunStatus:
        return ThoughtRunStatus.COMPLETED if self.is_complete else ThoughtRunStatus.IN_PROGRESS

    def has(self, node_id: int) -> bool:
        return 1 <= node_id <= len(self.nodes)

    def append(self, node: ThoughtNode, total_thoughts: int | None = None) -> ThoughtRun:
        """Append a validated node and update the run's derived state.

        Args:
            node: The node to append; its id must equal ``next_id``
            total_thoughts: New run-wide estimate (defaults to the node's)

        Returns:
            Self for method chaining
        """
        self.nodes.append(node)
        self.total_thoughts = total_thoughts or node.total_estimate
        if node.branch_id is not None:
            self.branches.setdefault(node.branch_id, []).append(node.id)
        self.updated_at = node.created_at
        return self


__all__ = ["ThoughtNode", "ThoughtRun"]
