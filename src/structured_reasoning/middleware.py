"""Call logging and per-tool outcome counters for the MCP server.

Every tool returns an envelope, so a call that completes can still have
failed. The middleware tells the three outcomes apart: ``ok`` envelopes,
``failed`` envelopes, and calls that raised before producing one.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    import mcp.types as mt
    from fastmcp.tools.tool import ToolResult
    from mcp.server.lowlevel.helper_types import ReadResourceContents

logger = logging.getLogger(__name__)


@dataclass
class ToolStats:
    """Outcomes of one tool."""

    calls: int = 0
    failed: int = 0
    raised: int = 0
    total_ms: float = 0.0

    @property
    def mean_ms(self) -> float:
        return self.total_ms / self.calls if self.calls else 0.0


@dataclass
class ServerMetrics:
    """Counters for one server lifetime."""

    tools: dict[str, ToolStats] = field(default_factory=dict)
    # Resource reads keyed by URI scheme ("thoughts", "brainstorm")
    reads: dict[str, int] = field(default_factory=dict)
    read_errors: int = 0

    def stats_for(self, tool: str) -> ToolStats:
        return self.tools.setdefault(tool, ToolStats())

    @property
    def tool_calls(self) -> int:
        return sum(s.calls for s in self.tools.values())

    @property
    def failed_envelopes(self) -> int:
        return sum(s.failed for s in self.tools.values())

    @property
    def errors(self) -> int:
        return sum(s.raised for s in self.tools.values()) + self.read_errors

    @property
    def resource_reads(self) -> int:
        return sum(self.reads.values())

    def summary(self) -> str:
        """One line per tool, busiest first."""
        ranked = sorted(self.tools.items(), key=lambda item: item[1].calls, reverse=True)
        lines = [
            f"{name}: {s.calls} calls, {s.failed} failed, {s.raised} raised, "
            f"{s.mean_ms:.1f}ms mean"
            for name, s in ranked
        ]
        lines.append(f"resources: {self.resource_reads} reads, {self.read_errors} errors")
        return "\n".join(lines)


def _outcome(result: Any) -> str:
    content = getattr(result, "structured_content", None)
    if isinstance(content, dict) and content.get("success") is False:
        return f"failed: {content.get('error')}"
    return "ok"


def _target(arguments: dict[str, Any] | None) -> str:
    """Name the run or session a call addresses, for the log line."""
    session_id = (arguments or {}).get("sessionId")
    return f" [{session_id}]" if session_id else ""


class ReasoningMiddleware(Middleware):
    """Logs each tool call and resource read and keeps per-tool counters.

    Example:
        >>> middleware = ReasoningMiddleware(log_level=logging.INFO)
        >>> mcp.add_middleware(middleware)
        >>> middleware.get_metrics().tool_calls
        0
    """

    def __init__(
        self,
        *,
        enable_logging: bool = True,
        enable_metrics: bool = True,
        log_level: int = logging.DEBUG,
    ) -> None:
        self.enable_logging = enable_logging
        self.enable_metrics = enable_metrics
        self.log_level = log_level
        self.metrics = ServerMetrics()

    def _log(self, message: str) -> None:
        if self.enable_logging:
            logger.log(self.log_level, message)

    async def on_call_tool(
        self,
        context: MiddlewareContext[mt.CallToolRequestParams],
        call_next: CallNext[mt.CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        name = context.message.name
        label = f"{name}{_target(getattr(context.message, 'arguments', None))}"
        stats = self.metrics.stats_for(name) if self.enable_metrics else ToolStats()
        stats.calls += 1
        start = time.perf_counter()

        try:
            result = await call_next(context)
        except Exception as e:
            stats.raised += 1
            logger.error(f"{label} raised {type(e).__name__}: {e}")
            raise
        finally:
            stats.total_ms += (time.perf_counter() - start) * 1000

        outcome = _outcome(result)
        if outcome != "ok":
            stats.failed += 1
        self._log(f"{label} -> {outcome}")
        return result

    async def on_read_resource(
        self,
        context: MiddlewareContext[mt.ReadResourceRequestParams],
        call_next: CallNext[mt.ReadResourceRequestParams, Sequence[ReadResourceContents]],
    ) -> Sequence[ReadResourceContents]:
        uri = str(context.message.uri)
        scheme = uri.split("://", 1)[0]
        if self.enable_metrics:
            self.metrics.reads[scheme] = self.metrics.reads.get(scheme, 0) + 1

        try:
            contents = await call_next(context)
        except Exception as e:
            if self.enable_metrics:
                self.metrics.read_errors += 1
            logger.error(f"Reading {uri} failed: {e}")
            raise
        self._log(f"Read {uri}")
        return contents

    def get_metrics(self) -> ServerMetrics:
        return self.metrics

    def reset_metrics(self) -> None:
        self.metrics = ServerMetrics()


__all__ = ["ReasoningMiddleware", "ServerMetrics", "ToolStats"]
