"""Capability dispatch for structured-reasoning.

RequestDispatcher is the single boundary between loose parameter bags and the
engines. It validates a bag once into a typed request, routes it to the
owning engine, and folds every error into a failure envelope.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from structured_reasoning.engine.brainstorm import BrainstormPhaseEngine
from structured_reasoning.engine.thought_graph import ThoughtGraphEngine
from structured_reasoning.models.core import CAPABILITY_ALIASES, Capability
from structured_reasoning.models.tools import (
    ContinueBrainstormingRequest,
    GetBrainstormSessionRequest,
    GetThoughtRunRequest,
    ListBrainstormSessionsRequest,
    StartBrainstormingRequest,
    SubmitThoughtRequest,
    ToolRequest,
    ToolResponse,
)
from structured_reasoning.utils.validation import ReasoningError, ValidationError

logger = logging.getLogger(__name__)

_REQUEST_ADAPTER: TypeAdapter[ToolRequest] = TypeAdapter(ToolRequest)


def resolve_capability(name: str) -> Capability | None:
    """Map a capability name or alias to a Capability, or None if unknown."""
    if name in CAPABILITY_ALIASES:
        return CAPABILITY_ALIASES[name]
    try:
        return Capability(name)
    except ValueError:
        return None


def _describe(error: PydanticValidationError) -> str:
    """Turn the first pydantic error into a one-line message."""
    first = error.errors()[0]
    # The first location element is the union tag
    loc = [str(part) for part in first["loc"][1:]] or [str(part) for part in first["loc"]]
    field = ".".join(loc)
    if first["type"] == "missing":
        return f"{field} is required"
    return f"Invalid {field}: {first['msg']}"


class RequestDispatcher:
    """Routes capability calls to the thought and brainstorming engines.

    Examples:
        >>> directory = SessionDirectory()
        >>> dispatcher = RequestDispatcher(
        ...     ThoughtGraphEngine(directory), BrainstormPhaseEngine(directory)
        ... )
        >>> response = await dispatcher.dispatch(
        ...     "start_brainstorming", {"topic": "UX", "phase": "preparation"}
        ... )
        >>> assert response.success
        >>> response = await dispatcher.dispatch("teleport", {})
        >>> assert response.error == "Capability 'teleport' not supported"
    """

    def __init__(
        self,
        thought_engine: ThoughtGraphEngine,
        brainstorm_engine: BrainstormPhaseEngine,
    ) -> None:
        self.thought_engine = thought_engine
        self.brainstorm_engine = brainstorm_engine

    def parse(self, capability: Capability, params: Mapping[str, Any] | None) -> ToolRequest:
        """Validate a parameter bag into the typed request for ``capability``.

        Raises:
            ValidationError: If a field is missing or has the wrong type
        """
        bag = dict(params or {})
        bag["capability"] = capability.value
        try:
            return _REQUEST_ADAPTER.validate_python(bag)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e

    async def dispatch(self, capability: str, params: Mapping[str, Any] | None = None) -> ToolResponse:
        """Run one capability call and wrap the outcome in an envelope.

        Args:
            capability: Capability name or alias
            params: Parameter bag keyed by camelCase protocol names

        Returns:
            A success envelope carrying the payload, or a failure envelope
            carrying the error message. No exception propagates.
        """
        resolved = resolve_capability(capability)
        if resolved is None:
            logger.warning(f"Rejected unknown capability: {capability}")
            return ToolResponse.fail(f"Capability '{capability}' not supported")

        try:
            request = self.parse(resolved, params)
            data = await self._route(request)
        except ReasoningError as e:
            logger.info(f"{resolved.value} failed: {e}")
            return ToolResponse.fail(str(e))
        except Exception as e:
            # Unexpected faults still end in an envelope
            logger.exception(f"{resolved.value} raised an unexpected error")
            return ToolResponse.fail(f"Internal error in {resolved.value}: {e}")

        logger.debug(f"{resolved.value} succeeded")
        return ToolResponse.ok(data)

    async def _route(self, request: ToolRequest) -> dict[str, Any]:
        if isinstance(request, SubmitThoughtRequest):
            return (await self.thought_engine.submit_thought(request)).to_payload()
        if isinstance(request, StartBrainstormingRequest):
            return (await self.brainstorm_engine.start_session(request)).to_payload()
        if isinstance(request, ContinueBrainstormingRequest):
            return (await self.brainstorm_engine.continue_session(request)).to_payload()
        if isinstance(request, GetThoughtRunRequest):
            return (await self.thought_engine.get_run(request.session_id)).to_payload()
        if isinstance(request, GetBrainstormSessionRequest):
            return (await self.brainstorm_engine.get_session(request.session_id)).to_payload()
        if isinstance(request, ListBrainstormSessionsRequest):
            summaries = await self.brainstorm_engine.list_sessions(limit=request.limit)
            return {"sessions": [s.to_payload() for s in summaries], "count": len(summaries)}
        raise ValidationError(f"Capability '{request.capability}' not supported")


__all__ = ["RequestDispatcher", "resolve_capability"]
