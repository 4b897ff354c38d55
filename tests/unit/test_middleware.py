"""Tests for ReasoningMiddleware."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from structured_reasoning.middleware import ReasoningMiddleware, ServerMetrics, ToolStats


def _tool_context(name: str, **arguments) -> SimpleNamespace:
    return SimpleNamespace(message=SimpleNamespace(name=name, arguments=arguments))


def _envelope(success: bool, error: str | None = None) -> SimpleNamespace:
    content = {"success": True, "data": {}} if success else {"success": False, "error": error}
    return SimpleNamespace(structured_content=content)


class TestServerMetrics:
    """Tests for the metric containers."""

    def test_empty(self) -> None:
        metrics = ServerMetrics()

        assert metrics.tool_calls == 0
        assert metrics.failed_envelopes == 0
        assert metrics.errors == 0
        assert metrics.resource_reads == 0

    def test_mean_ms(self) -> None:
        assert ToolStats().mean_ms == 0.0
        assert ToolStats(calls=4, total_ms=10.0).mean_ms == 2.5

    def test_summary_orders_by_calls(self) -> None:
        metrics = ServerMetrics()
        metrics.stats_for("start_brainstorming").calls = 1
        metrics.stats_for("submit_thought").calls = 3
        metrics.reads["thoughts"] = 2

        lines = metrics.summary().splitlines()

        assert lines[0].startswith("submit_thought: 3 calls")
        assert lines[1].startswith("start_brainstorming: 1 calls")
        assert lines[-1] == "resources: 2 reads, 0 errors"


class TestReasoningMiddleware:
    """Tests for ReasoningMiddleware class."""

    def test_init_defaults(self) -> None:
        middleware = ReasoningMiddleware()

        assert middleware.enable_logging is True
        assert middleware.enable_metrics is True
        assert middleware.log_level == logging.DEBUG

    @pytest.mark.asyncio
    async def test_counts_calls_per_tool(self) -> None:
        middleware = ReasoningMiddleware()
        call_next = AsyncMock(return_value=_envelope(True))

        await middleware.on_call_tool(_tool_context("submit_thought"), call_next)
        await middleware.on_call_tool(_tool_context("submit_thought"), call_next)

        metrics = middleware.get_metrics()
        assert metrics.tool_calls == 2
        assert metrics.tools["submit_thought"].calls == 2
        assert metrics.failed_envelopes == 0
        assert metrics.tools["submit_thought"].total_ms >= 0

    @pytest.mark.asyncio
    async def test_counts_failure_envelopes(self) -> None:
        middleware = ReasoningMiddleware()
        call_next = AsyncMock(return_value=_envelope(False, "Brainstorming session not found: x"))

        await middleware.on_call_tool(
            _tool_context("continue_brainstorming", sessionId="x"), call_next
        )

        assert middleware.get_metrics().tools["continue_brainstorming"].failed == 1
        assert middleware.get_metrics().failed_envelopes == 1

    @pytest.mark.asyncio
    async def test_logs_session_and_outcome(self, caplog, monkeypatch) -> None:
        monkeypatch.setattr(logging.getLogger("structured_reasoning"), "propagate", True)
        middleware = ReasoningMiddleware(log_level=logging.INFO)
        call_next = AsyncMock(return_value=_envelope(False, "nope"))

        with caplog.at_level(logging.INFO, logger="structured_reasoning.middleware"):
            await middleware.on_call_tool(
                _tool_context("continue_brainstorming", sessionId="s-1"), call_next
            )

        assert "continue_brainstorming [s-1] -> failed: nope" in caplog.text

    @pytest.mark.asyncio
    async def test_counts_raised_and_reraises(self) -> None:
        middleware = ReasoningMiddleware()
        call_next = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await middleware.on_call_tool(_tool_context("submit_thought"), call_next)

        assert middleware.get_metrics().tools["submit_thought"].raised == 1
        assert middleware.get_metrics().errors == 1

    @pytest.mark.asyncio
    async def test_metrics_disabled(self) -> None:
        middleware = ReasoningMiddleware(enable_metrics=False)
        call_next = AsyncMock(return_value=SimpleNamespace(structured_content=None))

        await middleware.on_call_tool(_tool_context("submit_thought"), call_next)

        assert middleware.get_metrics().tool_calls == 0

    @pytest.mark.asyncio
    async def test_resource_reads_by_scheme(self) -> None:
        middleware = ReasoningMiddleware()
        call_next = AsyncMock(return_value=[])

        for uri in ("thoughts://default", "thoughts://other", "brainstorm://b-1"):
            context = SimpleNamespace(message=SimpleNamespace(uri=uri))
            await middleware.on_read_resource(context, call_next)

        assert middleware.get_metrics().reads == {"thoughts": 2, "brainstorm": 1}

    @pytest.mark.asyncio
    async def test_resource_errors(self) -> None:
        middleware = ReasoningMiddleware()
        context = SimpleNamespace(message=SimpleNamespace(uri="thoughts://missing"))

        with pytest.raises(LookupError):
            await middleware.on_read_resource(context, AsyncMock(side_effect=LookupError("x")))

        assert middleware.get_metrics().read_errors == 1

    def test_reset_metrics(self) -> None:
        middleware = ReasoningMiddleware()
        middleware.metrics.stats_for("submit_thought").calls = 5

        middleware.reset_metrics()

        assert middleware.get_metrics().tool_calls == 0
