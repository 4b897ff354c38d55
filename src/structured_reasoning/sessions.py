"""Session directory for structured-reasoning.

This module provides the SessionDirectory class, the single keyed store that
owns every thought run and brainstorming session in the process. Engines
receive a directory at construction instead of sharing module-level state.
"""

from __future__ import annotations

import asyncio
import secrets
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from structured_reasoning.models.brainstorm import BrainstormSession
from structured_reasoning.models.core import BrainstormPhase
from structured_reasoning.models.thought import ThoughtRun
from structured_reasoning.utils.validation import NotFoundError, SessionLimitError

DEFAULT_RUN_ID = "default"


class SessionDirectory:
    """Keyed store of thought runs and brainstorming sessions.

    Map-level changes (create, clear) are serialized by a directory
    lock. Each session id additionally owns an ``asyncio.Lock`` that engines
    hold for the whole validate-then-mutate span of an operation, so two
    concurrent calls against one session never interleave.

    Examples:
        Create a directory:
        >>> directory = SessionDirectory(max_sessions=100)
        >>> assert await directory.count() == 0

        Thought runs are created when first requested:
        >>> run = await directory.thought_run("default")
        >>> assert run.id == "default"
        >>> assert await directory.thought_run("default") is run

        Brainstorming sessions are created explicitly:
        >>> session = await directory.create_brainstorm("UX", BrainstormPhase.PREPARATION)
        >>> assert await directory.get_brainstorm(session.id) is session
        >>> assert await directory.get_brainstorm("missing") is None

        Serialize work on one session:
        >>> async with directory.exclusive(session.id):
        ...     session.add_idea("Add dark mode")
    """

    def __init__(self, max_sessions: int = 100, default_run_id: str = DEFAULT_RUN_ID):
        """Initialize the directory.

        Args:
            max_sessions: Maximum number of runs plus brainstorming sessions
            default_run_id: Run key used when a thought carries no session id
        """
        self._max_sessions = max_sessions
        self._default_run_id = default_run_id
        self._runs: dict[str, ThoughtRun] = {}
        self._brainstorms: dict[str, BrainstormSession] = {}
        self._session_locks: dict[str, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    @property
    def default_run_id(self) -> str:
        return self._default_run_id

    def _check_capacity(self) -> None:
        if len(self._runs) + len(self._brainstorms) >= self._max_sessions:
            raise SessionLimitError(self._max_sessions)

    def _lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._session_locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._session_locks[session_id] = lock
        return lock

    def generate_session_id(self, prefix: str = "brainstorm") -> str:
        """Generate an id from a millisecond timestamp and a random suffix.

        The id is re-drawn until it collides with no stored run or session.
        """
        while True:
            session_id = f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(4)}"
            if session_id not in self._brainstorms and session_id not in self._runs:
                return session_id

    @asynccontextmanager
    async def exclusive(self, session_id: str) -> AsyncIterator[None]:
        """Hold the per-session lock for the duration of the block.

        The lock is released on every exit path, including exceptions raised
        by validation inside the block.
        """
        async with self._lock:
            lock = self._lock_for(session_id)
        async with lock:
            yield

    async def thought_run(self, run_id: str | None = None) -> ThoughtRun:
        """Return the thought run for ``run_id``, creating it when absent.

        ThoughtGraphEngine calls this only once a first thought has passed
        validation, so rejected submissions never leave an empty run behind.

        Raises:
            SessionLimitError: If a new run is needed and the directory is full
        """
        key = run_id or self._default_run_id
        async with self._lock:
            run = self._runs.get(key)
            if run is None:
                self._check_capacity()
                run = ThoughtRun(id=key)
                self._runs[key] = run
            return run

    async def find_thought_run(self, run_id: str | None = None) -> ThoughtRun | None:
        """Return an existing thought run without creating one."""
        async with self._lock:
            return self._runs.get(run_id or self._default_run_id)

    async def create_brainstorm(
        self,
        topic: str,
        phase: BrainstormPhase,
        participants: list[str] | None = None,
    ) -> BrainstormSession:
        """Create and register a brainstorming session under a fresh id.

        Raises:
            SessionLimitError: If the directory is full
        """
        async with self._lock:
            self._check_capacity()
            session = BrainstormSession(
                id=self.generate_session_id(),
                topic=topic,
                phase=phase,
                participants=participants or [],
            )
            self._brainstorms[session.id] = session
            return session

    async def get_brainstorm(self, session_id: str) -> BrainstormSession | None:
        """Return a brainstorming session, or None. Never creates one."""
        async with self._lock:
            return self._brainstorms.get(session_id)

    async def require_brainstorm(self, session_id: str) -> BrainstormSession:
        """Return a brainstorming session or raise NotFoundError."""
        session = await self.get_brainstorm(session_id)
        if session is None:
            raise NotFoundError("Brainstorming session", session_id)
        return session

    async def list_brainstorms(self, *, limit: int = 100) -> list[BrainstormSession]:
        """List brainstorming sessions, most recently updated first."""
        async with self._lock:
            sessions = list(self._brainstorms.values())
        sessions.sort(key=lambda s: s.updated_at, reverse=True)
        return sessions[:limit]

    async def count(self) -> int:
        """Return the number of runs plus brainstorming sessions stored."""
        async with self._lock:
            return len(self._runs) + len(self._brainstorms)

    async def clear(self) -> None:
        """Remove all runs and sessions."""
        async with self._lock:
            self._runs.clear()
            self._brainstorms.clear()
            self._session_locks.clear()


__all__ = ["DEFAULT_RUN_ID", "SessionDirectory"]
