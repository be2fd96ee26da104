from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from llm_cli.errors import RunAborted

logger = logging.getLogger(__name__)


class CompletionCounter:
    """
    Number of provider round-trips still outstanding.
    Provider tasks only decrement (once each, through a CompletionSignal); the indicator only polls.
    All mutation happens on the event loop thread, so a plain int is enough.
    """

    def __init__(self, outstanding: int):
        if outstanding < 1:
            raise ValueError(f"outstanding must be >= 1, got {outstanding}")
        self._remaining = outstanding

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def done(self) -> bool:
        return self._remaining == 0

    def decrement(self) -> int:
        if self._remaining == 0:
            raise RuntimeError("completion counter is already at zero")
        self._remaining -= 1
        if self._remaining == 0:
            logger.debug("all round-trips resolved")
        return self._remaining

    def signal(self) -> CompletionSignal:
        return CompletionSignal(self)


class CompletionSignal:
    """
    One task's share of the counter. Calling it decrements at most once.

    Used as a context manager around a whole provider task, leaving the block fires
    it if the round-trip never resolved (early failure, transport error, cancellation).
    """

    def __init__(self, counter: CompletionCounter):
        self._counter = counter
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def __call__(self) -> None:
        if self._fired:
            return
        self._fired = True
        self._counter.decrement()

    def __enter__(self) -> CompletionSignal:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self()
        return False


class ConsoleGate:
    """
    Lock over every stdout write, also used as a barrier.

    The indicator takes it with hold() before spinning and keeps it until the prompt
    is echoed, so answers queued on `async with gate` can only print after that line.
    abort() breaks the gate: the indicator stops and later writers get RunAborted.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._broken = False

    @property
    def broken(self) -> bool:
        return self._broken

    def locked(self) -> bool:
        return self._lock.locked()

    def abort(self) -> None:
        if not self._broken:
            logger.debug("console gate aborted")
        self._broken = True

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[ConsoleGate]:
        async with self._lock:
            yield self

    async def __aenter__(self) -> ConsoleGate:
        await self._lock.acquire()
        if self._broken:
            self._lock.release()
            raise RunAborted("console gate was aborted by a failed request")
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._lock.release()
        return False
