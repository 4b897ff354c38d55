"""FastMCP server for structured-reasoning.

The server lifespan wires one SessionDirectory, both engines and the
dispatcher into an AppContext. Tool and resource functions reach it through
``get_app_context()``; the context only exists while a lifespan is active.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from structured_reasoning.config import Settings, get_settings
from structured_reasoning.dispatcher import RequestDispatcher
from structured_reasoning.engine.brainstorm import BrainstormPhaseEngine
from structured_reasoning.engine.thought_graph import ThoughtGraphEngine
from structured_reasoning.middleware import ReasoningMiddleware
from structured_reasoning.sessions import SessionDirectory

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


class ServerError(Exception):
    """Base exception for server-related errors."""


class StartupValidationError(ServerError):
    """Settings that cannot produce a working server."""

    def __init__(self, component: str, reason: str, recoverable: bool = False) -> None:
        self.component = component
        self.reason = reason
        self.recoverable = recoverable
        kind = "recoverable" if recoverable else "fatal"
        super().__init__(f"Cannot start {component}: {reason} ({kind})")


class AppContextNotInitializedError(RuntimeError):
    """A tool or resource ran outside an active server lifespan."""

    def __init__(self) -> None:
        super().__init__(
            "No session directory is available: the server lifespan has not "
            "started or has already ended"
        )


@dataclass
class AppContext:
    """Everything a tool call needs, built once per server lifespan.

    Attributes:
        settings: Settings the context was built from
        directory: Store of thought runs and brainstorming sessions
        thought_engine: Engine for sequential thought runs
        brainstorm_engine: Engine for brainstorming sessions
        dispatcher: Entry point every tool goes through
        middleware: Call logging and counters, when enabled
        initialized: True between lifespan startup and shutdown
    """

    settings: Settings
    directory: SessionDirectory
    thought_engine: ThoughtGraphEngine
    brainstorm_engine: BrainstormPhaseEngine
    dispatcher: RequestDispatcher
    middleware: ReasoningMiddleware | None = None
    initialized: bool = False


_APP_CONTEXT: AppContext | None = None


def get_app_context() -> AppContext:
    """Return the context of the running server.

    Raises:
        AppContextNotInitializedError: Outside an active lifespan
    """
    if _APP_CONTEXT is None:
        raise AppContextNotInitializedError()
    return _APP_CONTEXT


def build_app_context(settings: Settings) -> AppContext:
    """Wire the directory, engines and dispatcher from settings.

    Raises:
        StartupValidationError: If the settings cannot produce a usable context
    """
    if not settings.default_run_id.strip():
        raise StartupValidationError(
            component="SessionDirectory",
            reason="default_run_id must not be blank",
        )

    directory = SessionDirectory(
        max_sessions=settings.max_sessions,
        default_run_id=settings.default_run_id,
    )
    thought_engine = ThoughtGraphEngine(
        directory,
        max_thoughts_per_run=settings.max_thoughts_per_run,
        max_input_length=settings.max_input_length,
    )
    brainstorm_engine = BrainstormPhaseEngine(
        directory,
        strict_mutations=settings.brainstorm_strict_mutations,
        enforce_phase_order=settings.brainstorm_enforce_phase_order,
        max_input_length=settings.max_input_length,
    )
    return AppContext(
        settings=settings,
        directory=directory,
        thought_engine=thought_engine,
        brainstorm_engine=brainstorm_engine,
        dispatcher=RequestDispatcher(thought_engine, brainstorm_engine),
    )


def _attach_middleware(server: FastMCP, settings: Settings) -> ReasoningMiddleware:
    """Install the call middleware once per server and reuse it afterwards."""
    for existing in server.middleware:
        if isinstance(existing, ReasoningMiddleware):
            existing.reset_metrics()
            return existing
    middleware = ReasoningMiddleware(
        enable_metrics=settings.enable_middleware_metrics,
        log_level=logging.getLevelName(settings.middleware_log_level),
    )
    server.add_middleware(middleware)
    return middleware


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Build the AppContext on startup and drop all sessions on shutdown.

    Raises:
        StartupValidationError: If the settings cannot produce a usable context
    """
    global _APP_CONTEXT

    settings = get_settings()
    ctx = build_app_context(settings)
    if settings.enable_middleware:
        ctx.middleware = _attach_middleware(server, settings)
    ctx.initialized = True
    _APP_CONTEXT = ctx

    logger.info(
        f"{settings.server_name} ready: up to {settings.max_sessions} sessions, "
        f"{settings.max_thoughts_per_run} thoughts per run, "
        f"strict_mutations={settings.brainstorm_strict_mutations}, "
        f"enforce_phase_order={settings.brainstorm_enforce_phase_order}"
    )

    try:
        yield ctx
    finally:
        _APP_CONTEXT = None
        ctx.initialized = False

        stored = await ctx.directory.count()
        await ctx.directory.clear()
        logger.info(f"{settings.server_name} stopped; dropped {stored} in-memory session(s)")
        if ctx.middleware is not None:
            logger.info(f"Call summary:\n{ctx.middleware.get_metrics().summary()}")


mcp = FastMCP(name="structured-reasoning", lifespan=app_lifespan)

from structured_reasoning.tools.register import register_tools  # noqa: E402

register_tools(mcp)

from structured_reasoning.resources import register_all_resources  # noqa: E402

register_all_resources(mcp)


__all__ = [
    "AppContext",
    "AppContextNotInitializedError",
    "ServerError",
    "StartupValidationError",
    "app_lifespan",
    "build_app_context",
    "get_app_context",
    "mcp",
]
