"""Sequential thought graph engine.

ThoughtGraphEngine validates thought submissions against the current state of
a thought run and links accepted thoughts into it. Every check runs before
the run is touched, so a rejected submission leaves the run unchanged.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from structured_reasoning.models.core import ThoughtRunStatus
from structured_reasoning.models.thought import ThoughtNode, ThoughtRun
from structured_reasoning.models.tools import SubmitThoughtRequest, ThoughtOutput, ThoughtRunOutput
from structured_reasoning.sessions import SessionDirectory
from structured_reasoning.utils.formatting import format_thought
from structured_reasoning.utils.validation import (
    MAX_INPUT_LENGTH,
    NotFoundError,
    ValidationError,
    optional_positive_int,
    optional_text,
    require_positive_int,
    require_text,
)

logger = structlog.get_logger(__name__)

IN_PROGRESS_NEXT_STEPS = [
    "Continue with the next thought",
    "Explore alternative branches if needed",
    "Revise previous thoughts if new insights emerge",
]
COMPLETED_NEXT_STEPS = [
    "Review the complete thought sequence",
    "Extract key insights and conclusions",
    "Apply the derived approach to the problem",
]


class ThoughtGraphEngine:
    """Validates and appends thoughts to runs held by a SessionDirectory.

    Examples:
        >>> engine = ThoughtGraphEngine(SessionDirectory())
        >>> output = await engine.submit_thought(SubmitThoughtRequest(
        ...     thought="Understand the problem",
        ...     thought_number=1,
        ...     total_thoughts=3,
        ...     next_thought_needed=True,
        ... ))
        >>> assert output.thought_history_length == 1
    """

    def __init__(
        self,
        directory: SessionDirectory,
        *,
        max_thoughts_per_run: int = 1000,
        max_input_length: int = MAX_INPUT_LENGTH,
    ) -> None:
        self.directory = directory
        self.max_thoughts_per_run = max_thoughts_per_run
        self.max_input_length = max_input_length

    async def submit_thought(self, request: SubmitThoughtRequest) -> ThoughtOutput:
        """Validate a thought against its run and append it.

        Checks run in this order and the first failure wins: content,
        thought number, total estimate, sequencing, revision reference,
        branch reference, run capacity.

        Args:
            request: Typed ``submit_thought`` parameters

        Returns:
            ThoughtOutput describing the run after the append

        Raises:
            ValidationError: If any check fails; the run is left unchanged and
                no new run is created
            SessionLimitError: If a new run is needed and the directory is full
        """
        content = require_text(
            request.thought,
            "thought",
            max_chars=self.max_input_length,
            message="Thought content is required",
        )
        thought_number = require_positive_int(
            request.thought_number,
            "thoughtNumber",
            message="Thought number must be a positive integer",
        )
        total_thoughts = require_positive_int(
            request.total_thoughts,
            "totalThoughts",
            message="Total thoughts must be a positive integer",
        )
        run_key = optional_text(request.session_id, "sessionId") or self.directory.default_run_id

        async with self.directory.exclusive(run_key):
            stored = await self.directory.find_thought_run(run_key)
            run = stored or ThoughtRun(id=run_key)

            if thought_number != run.next_id:
                raise ValidationError(
                    f"Thought number {thought_number} is out of sequence; "
                    f"expected {run.next_id}"
                )

            revision_of = self._check_revision(request, run, thought_number)
            branch_from, branch_id = self._check_branch(request, run, thought_number)

            if run.node_count >= self.max_thoughts_per_run:
                raise ValidationError(
                    f"Thought run '{run.id}' reached the maximum of "
                    f"{self.max_thoughts_per_run} thoughts"
                )

            node = ThoughtNode(
                id=thought_number,
                content=content,
                total_estimate=max(total_thoughts, thought_number),
                needs_follow_up=request.next_thought_needed,
                needs_more_thoughts=bool(request.needs_more_thoughts),
                revision_of=revision_of,
                branch_from=branch_from,
                branch_id=branch_id,
            )
            if stored is None:
                # Only an accepted first thought creates the run
                run = await self.directory.thought_run(run_key)
            run.append(node)

            formatted = format_thought(node, run.total_thoughts)
            logger.info(
                "thought_submitted",
                run_id=run.id,
                thought_number=node.id,
                total_thoughts=run.total_thoughts,
                is_revision=node.is_revision,
                is_branch=node.is_branch,
                status=str(run.status),
            )
            logger.debug("thought_rendered", run_id=run.id, text=formatted)

            return ThoughtOutput(
                run_id=run.id,
                thought_number=node.id,
                total_thoughts=run.total_thoughts,
                next_thought_needed=node.continues,
                branches=run.branch_ids,
                thought_history_length=run.node_count,
                is_revision=node.is_revision,
                is_branch=node.is_branch,
                status=run.status,
                suggested_next_steps=list(
                    IN_PROGRESS_NEXT_STEPS
                    if run.status == ThoughtRunStatus.IN_PROGRESS
                    else COMPLETED_NEXT_STEPS
                ),
                formatted=formatted,
                timestamp=datetime.now(),
            )

    def _check_revision(
        self, request: SubmitThoughtRequest, run: ThoughtRun, thought_number: int
    ) -> int | None:
        revises = optional_positive_int(request.revises_thought, "revisesThought")
        if request.is_revision and revises is None:
            raise ValidationError("revisesThought is required when isRevision is true")
        if revises is None:
            return None
        if revises >= thought_number:
            raise ValidationError(
                f"revisesThought ({revises}) must refer to an earlier thought "
                f"than {thought_number}"
            )
        if not run.has(revises):
            raise ValidationError(f"Cannot revise thought {revises}: it does not exist")
        return revises

    def _check_branch(
        self, request: SubmitThoughtRequest, run: ThoughtRun, thought_number: int
    ) -> tuple[int | None, str | None]:
        branch_from = optional_positive_int(request.branch_from_thought, "branchFromThought")
        branch_id = optional_text(request.branch_id, "branchId", max_chars=self.max_input_length)
        if branch_from is None:
            return None, branch_id
        if branch_from >= thought_number:
            raise ValidationError(
                f"branchFromThought ({branch_from}) must refer to an earlier thought "
                f"than {thought_number}"
            )
        if not run.has(branch_from):
            raise ValidationError(f"Cannot branch from thought {branch_from}: it does not exist")
        if branch_id is None:
            raise ValidationError("branchId is required when branchFromThought is provided")
        return branch_from, branch_id

    async def get_run(self, run_id: str | None = None) -> ThoughtRunOutput:
        """Return a snapshot of a thought run.

        Raises:
            NotFoundError: If the run does not exist; reads never create runs
        """
        key = run_id or self.directory.default_run_id
        run = await self.directory.find_thought_run(key)
        if run is None:
            raise NotFoundError("Thought run", key)
        async with self.directory.exclusive(key):
            return ThoughtRunOutput(
                run_id=run.id,
                total_thoughts=run.total_thoughts,
                thought_history_length=run.node_count,
                branches={k: list(v) for k, v in run.branches.items()},
                status=run.status,
                thoughts=[n.model_dump(mode="json", by_alias=True) for n in run.nodes],
            )


__all__ = ["COMPLETED_NEXT_STEPS", "IN_PROGRESS_NEXT_STEPS", "ThoughtGraphEngine"]
