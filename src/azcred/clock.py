"""Time source and cooperative suspension for the polling loop.

The device code flow keeps two timers -- the per-poll interval and the
overall deadline.  Both read from a :class:`Clock` so tests can substitute
virtual time and assert on every sleep without waiting for real seconds.

:func:`run_cancellable` is the single place where an optional
:class:`asyncio.Event` is raced against a suspension point (a sleep or
an HTTP round-trip).
"""

from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Awaitable, Optional, TypeVar

from azcred.exceptions import AuthCancelledError

T = TypeVar("T")


class Clock(ABC):
    """Monotonic time plus a non-blocking sleep."""

    @abstractmethod
    def monotonic(self) -> float:
        """Return seconds from an arbitrary, never-decreasing origin."""
        ...

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        """Suspend the calling task for *seconds* without blocking the loop."""
        ...


class SystemClock(Clock):
    """Real time: :func:`time.monotonic` and :func:`asyncio.sleep`."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


async def run_cancellable(
    awaitable: Awaitable[T], cancel: Optional[asyncio.Event] = None
) -> T:
    """Await *awaitable*, abandoning it if *cancel* is set first.

    Args:
        awaitable: The suspension point to run (sleep or network call).
        cancel: Optional event; when it fires the awaitable's task is
            cancelled.

    Returns:
        Whatever *awaitable* returns.

    Raises:
        AuthCancelledError: If *cancel* is set before or while waiting.
    """
    if cancel is None:
        return await awaitable
    if cancel.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise AuthCancelledError("Authentication was cancelled")

    work = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not work.done():
            work.cancel()

    if work.done() and not work.cancelled():
        return work.result()
    raise AuthCancelledError("Authentication was cancelled")
