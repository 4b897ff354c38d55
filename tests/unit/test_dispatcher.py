"""Unit tests for RequestDispatcher.

Tests cover capability resolution, parameter validation at the boundary, and
folding of every recoverable error into the failure envelope.
"""

import pytest

from structured_reasoning.dispatcher import resolve_capability
from structured_reasoning.models.core import Capability
from structured_reasoning.models.tools import ToolResponse

THOUGHT = {
    "thought": "Frame the problem",
    "thoughtNumber": 1,
    "totalThoughts": 2,
    "nextThoughtNeeded": True,
}


class TestResolveCapability:
    """Tests for capability name resolution."""

    def test_names(self):
        assert resolve_capability("start_brainstorming") == Capability.START_BRAINSTORMING

    def test_alias(self):
        assert resolve_capability("process_sequential_thought") == Capability.SUBMIT_THOUGHT

    def test_unknown(self):
        assert resolve_capability("teleport") is None


class TestDispatch:
    """Tests for dispatch envelopes."""

    @pytest.mark.asyncio
    async def test_unknown_capability(self, dispatcher):
        response = await dispatcher.dispatch("teleport", {})

        assert isinstance(response, ToolResponse)
        assert response.to_payload() == {
            "success": False,
            "error": "Capability 'teleport' not supported",
        }

    @pytest.mark.asyncio
    async def test_submit_thought(self, dispatcher):
        response = await dispatcher.dispatch("submit_thought", THOUGHT)

        assert response.success is True
        assert response.data["thoughtNumber"] == 1
        assert response.data["thoughtHistoryLength"] == 1

    @pytest.mark.asyncio
    async def test_alias_reaches_same_run(self, dispatcher):
        await dispatcher.dispatch("submit_thought", THOUGHT)
        response = await dispatcher.dispatch(
            "process_sequential_thought", {**THOUGHT, "thoughtNumber": 2}
        )

        assert response.success is True
        assert response.data["thoughtHistoryLength"] == 2

    @pytest.mark.asyncio
    async def test_missing_field(self, dispatcher):
        params = {k: v for k, v in THOUGHT.items() if k != "thought"}

        response = await dispatcher.dispatch("submit_thought", params)

        assert response.success is False
        assert response.error == "thought is required"

    @pytest.mark.asyncio
    async def test_wrong_type(self, dispatcher):
        response = await dispatcher.dispatch("submit_thought", {**THOUGHT, "thoughtNumber": "one"})

        assert response.success is False
        assert response.error.startswith("Invalid thoughtNumber:")

    @pytest.mark.asyncio
    async def test_validation_error_becomes_envelope(self, dispatcher):
        response = await dispatcher.dispatch(
            "submit_thought", {**THOUGHT, "branchFromThought": 1, "thoughtNumber": 1}
        )

        assert response.success is False
        assert "earlier thought" in response.error

    @pytest.mark.asyncio
    async def test_params_capability_key_is_overridden(self, dispatcher):
        response = await dispatcher.dispatch(
            "start_brainstorming",
            {"capability": "submit_thought", "topic": "UX", "phase": "preparation"},
        )

        assert response.success is True
        assert response.data["session"]["topic"] == "UX"

    @pytest.mark.asyncio
    async def test_none_params(self, dispatcher):
        response = await dispatcher.dispatch("list_brainstorm_sessions", None)

        assert response.to_payload() == {"success": True, "data": {"sessions": [], "count": 0}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["\x00", "\x00 "])
    async def test_null_bytes_only_thought(self, dispatcher, content):
        response = await dispatcher.dispatch("submit_thought", {**THOUGHT, "thought": content})

        assert response.to_payload() == {"success": False, "error": "Thought content is required"}

    @pytest.mark.asyncio
    async def test_two_bad_fields_report_type_error(self, dispatcher):
        response = await dispatcher.dispatch(
            "submit_thought", {**THOUGHT, "thought": "", "thoughtNumber": "x"}
        )

        assert response.success is False
        assert response.error.startswith("Invalid thoughtNumber:")

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_envelope(self, dispatcher, thought_engine, monkeypatch):
        async def explode(request):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(thought_engine, "submit_thought", explode)

        response = await dispatcher.dispatch("submit_thought", THOUGHT)

        assert response.to_payload() == {
            "success": False,
            "error": "Internal error in submit_thought: disk on fire",
        }


class TestBrainstormDispatch:
    """Tests for the brainstorming capabilities through the dispatcher."""

    @pytest.mark.asyncio
    async def test_start(self, dispatcher):
        response = await dispatcher.dispatch(
            "start_brainstorming", {"topic": "UX improvements", "phase": "preparation"}
        )

        data = response.data
        assert response.success is True
        assert data["session"]["ideas"] == []
        assert data["session"]["phase"] == "preparation"
        assert "Define the problem or opportunity clearly" in data["nextSteps"]

    @pytest.mark.asyncio
    async def test_unknown_session_never_created(self, dispatcher, directory):
        response = await dispatcher.dispatch(
            "continue_brainstorming", {"sessionId": "nope", "phase": "ideation", "newIdea": "x"}
        )

        assert response.success is False
        assert await directory.count() == 0

    @pytest.mark.asyncio
    async def test_get_and_list(self, dispatcher):
        started = await dispatcher.dispatch(
            "start_brainstorming", {"topic": "UX", "phase": "ideation"}
        )
        session_id = started.data["session"]["id"]

        got = await dispatcher.dispatch("get_brainstorm_session", {"sessionId": session_id})
        listed = await dispatcher.dispatch("list_brainstorm_sessions", {"limit": 5})

        assert got.data["session"]["id"] == session_id
        assert listed.data["count"] == 1
        assert listed.data["sessions"][0]["sessionId"] == session_id

    @pytest.mark.asyncio
    async def test_get_missing_thought_run(self, dispatcher):
        response = await dispatcher.dispatch("get_thought_run", {"sessionId": "ghost"})

        assert response.to_payload() == {
            "success": False,
            "error": "Thought run not found: ghost",
        }

    @pytest.mark.asyncio
    async def test_invalid_limit(self, dispatcher):
        response = await dispatcher.dispatch("list_brainstorm_sessions", {"limit": 0})

        assert response.success is False
        assert response.error.startswith("Invalid limit:")

    @pytest.mark.asyncio
    async def test_null_bytes_only_topic(self, dispatcher, directory):
        response = await dispatcher.dispatch(
            "start_brainstorming", {"topic": "\x00 ", "phase": "preparation"}
        )

        assert response.success is False
        assert response.error == "Topic is required for starting a brainstorming session"
        assert await directory.count() == 0

    @pytest.mark.asyncio
    async def test_continue_without_session_id(self, dispatcher):
        response = await dispatcher.dispatch("continue_brainstorming", {"phase": "ideation"})

        assert response.to_payload() == {
            "success": False,
            "error": "A valid brainstorming session ID is required",
        }
