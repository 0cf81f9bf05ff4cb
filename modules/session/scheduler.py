"""
Cancellable deferred tasks.

The session controller arms one-shot timers (token refresh, inactivity
timeout) through an IScheduler. Cancelling a handle only stops a callback
that has not fired yet; a callback that already started runs to completion
and is expected to check for itself whether its work is still relevant.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TimerCallback = Callable[[], Awaitable[None]]


@runtime_checkable
class IScheduledTask(Protocol):
    """Handle for one scheduled callback."""

    @property
    def delay(self) -> float:
        """Seconds between scheduling and firing."""
        ...

    @property
    def cancelled(self) -> bool:
        ...

    def cancel(self) -> None:
        """Prevent the callback from firing. Idempotent."""
        ...


@runtime_checkable
class IScheduler(Protocol):
    """Interface for arming one-shot timers."""

    def schedule(self, delay: float, callback: TimerCallback) -> IScheduledTask:
        """
        Run ``callback`` once after ``delay`` seconds.

        Returns:
            A handle that can cancel the callback before it fires
        """
        ...


class AsyncioScheduledTask(IScheduledTask):
    """Handle around an asyncio TimerHandle."""

    def __init__(self, delay: float):
        self._delay = delay
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cancelled = False
        self._fired = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        if self._cancelled or self._fired:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def attach(self, timer: asyncio.TimerHandle) -> None:
        """Bind the loop timer that will fire this task."""
        self._timer = timer

    def mark_fired(self) -> None:
        self._fired = True


class AsyncioScheduler(IScheduler):
    """
    Scheduler on the running asyncio event loop.

    Callbacks run as tasks; the scheduler keeps a reference to each until
    it finishes and logs any exception it raised.
    """

    def __init__(self):
        self._running: set[asyncio.Task] = set()

    def schedule(self, delay: float, callback: TimerCallback) -> AsyncioScheduledTask:
        loop = asyncio.get_running_loop()
        handle = AsyncioScheduledTask(delay)

        def fire() -> None:
            if handle.cancelled:
                return
            handle.mark_fired()
            task = loop.create_task(callback())
            self._running.add(task)
            task.add_done_callback(self._finished)

        handle.attach(loop.call_later(max(delay, 0.0), fire))
        return handle

    def _finished(self, task: asyncio.Task) -> None:
        self._running.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Scheduled callback failed: {type(error).__name__}: {error}",
                exc_info=error,
            )

    async def wait_idle(self) -> None:
        """Wait for callbacks that have already fired to finish."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel callbacks that are still running."""
        for task in list(self._running):
            task.cancel()
        await asyncio.gather(*list(self._running), return_exceptions=True)
        self._running.clear()
