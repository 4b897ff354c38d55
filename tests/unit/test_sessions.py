"""Unit tests for SessionDirectory.

This module tests the keyed store of thought runs and brainstorming sessions,
its capacity limit, and the per-session locks.
"""

import asyncio
import re

import pytest

from structured_reasoning.models.core import BrainstormPhase
from structured_reasoning.sessions import DEFAULT_RUN_ID, SessionDirectory
from structured_reasoning.utils.validation import NotFoundError, SessionLimitError


class TestSessionDirectoryInit:
    """Test SessionDirectory initialization."""

    @pytest.mark.asyncio
    async def test_init_with_defaults(self):
        directory = SessionDirectory()

        assert directory._max_sessions == 100
        assert directory.default_run_id == DEFAULT_RUN_ID
        assert isinstance(directory._lock, asyncio.Lock)
        assert await directory.count() == 0

    @pytest.mark.asyncio
    async def test_custom_default_run(self):
        directory = SessionDirectory(default_run_id="main")

        run = await directory.thought_run()

        assert run.id == "main"


class TestThoughtRuns:
    """Test thought run lookup and creation."""

    @pytest.mark.asyncio
    async def test_created_on_first_use(self, directory):
        run = await directory.thought_run("r1")

        assert run.id == "r1"
        assert await directory.thought_run("r1") is run
        assert await directory.count() == 1

    @pytest.mark.asyncio
    async def test_find_does_not_create(self, directory):
        assert await directory.find_thought_run("r1") is None
        assert await directory.count() == 0


class TestBrainstorms:
    """Test brainstorming session storage."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, directory):
        session = await directory.create_brainstorm("UX", BrainstormPhase.PREPARATION, ["ana"])

        assert await directory.get_brainstorm(session.id) is session
        assert session.participants == ["ana"]

    @pytest.mark.asyncio
    async def test_require_missing(self, directory):
        with pytest.raises(NotFoundError, match="Brainstorming session not found: nope"):
            await directory.require_brainstorm("nope")

    @pytest.mark.asyncio
    async def test_generated_id_format(self, directory):
        session = await directory.create_brainstorm("UX", BrainstormPhase.PREPARATION)

        assert re.fullmatch(r"brainstorm-\d+-[0-9a-f]{8}", session.id)

    @pytest.mark.asyncio
    async def test_generated_ids_are_unique(self, directory):
        sessions = [
            await directory.create_brainstorm(f"t{i}", BrainstormPhase.IDEATION) for i in range(20)
        ]

        assert len({s.id for s in sessions}) == 20


class TestCapacity:
    """Test the shared capacity limit."""

    @pytest.mark.asyncio
    async def test_limit_counts_runs_and_sessions(self):
        directory = SessionDirectory(max_sessions=2)
        await directory.thought_run("r1")
        await directory.create_brainstorm("UX", BrainstormPhase.PREPARATION)

        with pytest.raises(SessionLimitError, match=r"\(2\)"):
            await directory.thought_run("r2")
        with pytest.raises(SessionLimitError):
            await directory.create_brainstorm("more", BrainstormPhase.PREPARATION)

    @pytest.mark.asyncio
    async def test_existing_run_is_returned_at_capacity(self):
        directory = SessionDirectory(max_sessions=1)
        run = await directory.thought_run("r1")

        assert await directory.thought_run("r1") is run


class TestExclusive:
    """Test per-session locking."""

    @pytest.mark.asyncio
    async def test_serializes_same_session(self, directory):
        order: list[str] = []

        async def worker(name: str) -> None:
            async with directory.exclusive("s"):
                order.append(f"{name}-in")
                await asyncio.sleep(0.01)
                order.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert order in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])

    @pytest.mark.asyncio
    async def test_released_on_error(self, directory):
        with pytest.raises(RuntimeError):
            async with directory.exclusive("s"):
                raise RuntimeError("boom")

        assert not directory._lock_for("s").locked()


class TestClear:
    """Test removal."""

    @pytest.mark.asyncio
    async def test_clear(self, directory):
        await directory.thought_run("r1")
        await directory.create_brainstorm("UX", BrainstormPhase.PREPARATION)

        await directory.clear()

        assert await directory.count() == 0
