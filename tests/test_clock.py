"""Tests for the system clock and cancellation racing."""

from __future__ import annotations

import asyncio

import pytest

from azcred.clock import SystemClock, run_cancellable
from azcred.exceptions import AuthCancelledError


class TestSystemClock:
    def test_monotonic_never_decreases(self) -> None:
        clock = SystemClock()
        first = clock.monotonic()
        assert clock.monotonic() >= first

    @pytest.mark.asyncio
    async def test_sleep_yields(self) -> None:
        await SystemClock().sleep(0)


class TestRunCancellable:
    @pytest.mark.asyncio
    async def test_without_event(self) -> None:
        async def work() -> int:
            return 42

        assert await run_cancellable(work()) == 42

    @pytest.mark.asyncio
    async def test_unset_event(self) -> None:
        async def work() -> str:
            await asyncio.sleep(0)
            return "done"

        assert await run_cancellable(work(), asyncio.Event()) == "done"

    @pytest.mark.asyncio
    async def test_already_set(self) -> None:
        started = False

        async def work() -> None:
            nonlocal started
            started = True

        cancel = asyncio.Event()
        cancel.set()
        with pytest.raises(AuthCancelledError):
            await run_cancellable(work(), cancel)
        assert started is False

    @pytest.mark.asyncio
    async def test_set_while_waiting(self) -> None:
        cancel = asyncio.Event()
        never = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, cancel.set)

        with pytest.raises(AuthCancelledError):
            await run_cancellable(never.wait(), cancel)

    @pytest.mark.asyncio
    async def test_exception_propagates(self) -> None:
        async def work() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await run_cancellable(work(), asyncio.Event())
