"""
Pytest configuration and shared fixtures for structured-reasoning tests.

Every test gets a fresh SessionDirectory, so no state leaks between tests:
- Settings fixtures for permissive and strict configurations
- Directory and engine fixtures
- Dispatcher and AppContext fixtures for tool-level tests
"""

from collections.abc import Iterator
from typing import Any

import pytest

import structured_reasoning.server as server_module
from structured_reasoning.config import Settings
from structured_reasoning.dispatcher import RequestDispatcher
from structured_reasoning.engine.brainstorm import BrainstormPhaseEngine
from structured_reasoning.engine.thought_graph import ThoughtGraphEngine
from structured_reasoning.models.tools import (
    ContinueBrainstormingRequest,
    StartBrainstormingRequest,
    SubmitThoughtRequest,
)
from structured_reasoning.server import AppContext, build_app_context
from structured_reasoning.sessions import SessionDirectory


# ============================================================================
# SETTINGS FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Default settings, isolated from any .env file in the working directory."""
    return Settings(_env_file=None)


@pytest.fixture
def strict_settings() -> Settings:
    """Settings with both brainstorming strictness switches on."""
    return Settings(
        _env_file=None,
        brainstorm_strict_mutations=True,
        brainstorm_enforce_phase_order=True,
    )


# ============================================================================
# DIRECTORY AND ENGINE FIXTURES
# ============================================================================


@pytest.fixture
def directory() -> SessionDirectory:
    """A fresh, empty session directory."""
    return SessionDirectory(max_sessions=100)


@pytest.fixture
def thought_engine(directory: SessionDirectory) -> ThoughtGraphEngine:
    return ThoughtGraphEngine(directory, max_thoughts_per_run=50)


@pytest.fixture
def brainstorm_engine(directory: SessionDirectory) -> BrainstormPhaseEngine:
    return BrainstormPhaseEngine(directory)


@pytest.fixture
def strict_brainstorm_engine(directory: SessionDirectory) -> BrainstormPhaseEngine:
    return BrainstormPhaseEngine(directory, strict_mutations=True, enforce_phase_order=True)


@pytest.fixture
def dispatcher(
    thought_engine: ThoughtGraphEngine,
    brainstorm_engine: BrainstormPhaseEngine,
) -> RequestDispatcher:
    return RequestDispatcher(thought_engine, brainstorm_engine)


@pytest.fixture
def app_context(settings: Settings) -> Iterator[AppContext]:
    """Install an initialized AppContext for tool and resource functions."""
    ctx = build_app_context(settings)
    ctx.initialized = True
    server_module._APP_CONTEXT = ctx
    yield ctx
    server_module._APP_CONTEXT = None


# ============================================================================
# REQUEST BUILDERS
# ============================================================================


def _thought(number: int, total: int = 3, *, next_needed: bool = True, **extra: Any) -> SubmitThoughtRequest:
    return SubmitThoughtRequest(
        thought=extra.pop("content", f"Thought number {number}"),
        thought_number=number,
        total_thoughts=total,
        next_thought_needed=next_needed,
        **extra,
    )


def _start(topic: str = "UX improvements", phase: str = "preparation", **extra: Any) -> StartBrainstormingRequest:
    return StartBrainstormingRequest(topic=topic, phase=phase, **extra)


def _step(session_id: str, phase: str, **extra: Any) -> ContinueBrainstormingRequest:
    return ContinueBrainstormingRequest(session_id=session_id, phase=phase, **extra)


@pytest.fixture
def make_thought():
    """Build a submit_thought request: make_thought(number, total, next_needed=..., ...)."""
    return _thought


@pytest.fixture
def make_start():
    """Build a start_brainstorming request with a default topic and phase."""
    return _start


@pytest.fixture
def make_step():
    """Build a continue_brainstorming request: make_step(session_id, phase, ...)."""
    return _step
