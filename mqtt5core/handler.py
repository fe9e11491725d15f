"""Completion handlers that record cancellation requests."""

from __future__ import annotations

import asyncio
from enum import IntFlag
from typing import Any, Callable, Optional


class CancellationType(IntFlag):
    """Kinds of cancellation that may be requested of an operation."""

    NONE = 0
    TERMINAL = 1
    PARTIAL = 2
    TOTAL = 4
    ALL = TERMINAL | PARTIAL | TOTAL


class CancellableHandler:
    """Wraps a completion callback and tracks cancellation of its operation.

    Every kind of cancellation is recorded in ``cancelled``; only terminal
    cancellation is passed on to ``on_cancel``. Once completed, the handler
    ignores further cancellation requests and cannot be completed again.
    """

    def __init__(
        self,
        handler: Callable[..., Any],
        loop: Optional[asyncio.AbstractEventLoop] = None,
        on_cancel: Optional[Callable[[CancellationType], Any]] = None,
    ) -> None:
        self._handler: Optional[Callable[..., Any]] = handler
        self._loop = loop
        self.on_cancel = on_cancel
        self._cancelled = CancellationType.NONE

    @property
    def cancelled(self) -> CancellationType:
        """The cancellation last requested, or NONE."""
        return self._cancelled

    @property
    def done(self) -> bool:
        """Whether the handler has been completed."""
        return self._handler is None

    def cancel(self, kind: CancellationType = CancellationType.TERMINAL) -> CancellationType:
        """Request cancellation; returns what was passed on to ``on_cancel``."""
        if self._handler is None:
            return CancellationType.NONE
        self._cancelled = CancellationType(kind) & CancellationType.ALL
        forwarded = self._cancelled & CancellationType.TERMINAL
        if forwarded and self.on_cancel is not None:
            self.on_cancel(forwarded)
        return forwarded

    def _take(self) -> Callable[..., Any]:
        handler = self._handler
        if handler is None:
            raise RuntimeError("handler already completed")
        self._handler = None
        self.on_cancel = None
        return handler

    @staticmethod
    def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def complete(self, *args: Any) -> None:
        """Invoke the handler, inline when already on its event loop."""
        running = self._running_loop()
        if self._loop is not None and running is not self._loop:
            handler = self._take()
            self._loop.call_soon_threadsafe(handler, *args)
            return
        self._take()(*args)

    def complete_immediate(self, *args: Any) -> None:
        """Schedule the handler so that it never runs inside the caller."""
        running = self._running_loop()
        loop = self._loop or running
        if loop is None:
            raise RuntimeError("no event loop to schedule the handler on")
        handler = self._take()
        if loop is running:
            loop.call_soon(handler, *args)
        else:
            loop.call_soon_threadsafe(handler, *args)