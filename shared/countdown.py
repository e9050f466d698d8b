"""Asyncio helpers for delayed callbacks and once-per-second countdowns."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

Callback = Callable[[], None]
TickCallback = Callable[[int], None]


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Something that can run callbacks later; the game session only needs this."""

    def call_later(self, delay: float, callback: Callback) -> Cancellable: ...

    def countdown(
        self,
        seconds: int,
        *,
        on_tick: TickCallback,
        on_expire: Callback,
    ) -> Cancellable: ...


class _TimerTask:
    """Base for handles driven by a background task and a stop event."""

    def __init__(self) -> None:
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task[None]] = None
        self.completed = False

    def _start(self) -> None:
        if self._task is None:
            loop = asyncio.get_running_loop()
            self._task = loop.create_task(self._run())

    async def _wait(self, timeout: float) -> bool:
        """Sleep for ``timeout`` seconds; return ``True`` if cancelled meanwhile."""

        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=timeout)
            return True
        except asyncio.TimeoutError:
            return False

    async def _run(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def cancel(self) -> None:
        """Stop the timer; pending callbacks will not fire."""

        if self.completed:
            return
        self.completed = True
        self._stop_event.set()

    def is_active(self) -> bool:
        return not self.completed


class DelayedCall(_TimerTask):
    """Run ``callback`` once after ``delay`` seconds unless cancelled first."""

    def __init__(self, delay: float, callback: Callback) -> None:
        super().__init__()
        self.delay = max(delay, 0.0)
        self.callback = callback
        self._start()

    async def _run(self) -> None:
        try:
            if await self._wait(self.delay):
                return
            if self.completed:
                return
            self.completed = True
            self.callback()
        except asyncio.CancelledError:
            pass
        except Exception:  # pragma: no cover - safety net
            logger.exception("Delayed callback failed")


class CountdownHandle(_TimerTask):
    """Count ``seconds`` down to zero, reporting every tick.

    ``on_tick`` receives the seconds left after each interval; ``on_expire``
    runs once when the count reaches zero. Cancelling stops both.
    """

    def __init__(
        self,
        seconds: int,
        *,
        on_tick: TickCallback,
        on_expire: Callback,
        interval: float = 1.0,
    ) -> None:
        super().__init__()
        self.remaining = max(int(seconds), 0)
        self.on_tick = on_tick
        self.on_expire = on_expire
        self.interval = interval
        self._start()

    async def _run(self) -> None:
        try:
            while self.remaining > 0:
                if await self._wait(self.interval):
                    return
                self.remaining -= 1
                self._safe_call(self.on_tick, self.remaining)
            await self._handle_expire()
        except asyncio.CancelledError:
            pass
        except Exception:  # pragma: no cover - safety net
            logger.exception("Countdown task failed")

    async def _handle_expire(self) -> None:
        if self.completed:
            return
        self.completed = True
        self._stop_event.set()
        self._safe_call(self.on_expire)

    @staticmethod
    def _safe_call(callback: Callable[..., None], *args: int) -> None:
        try:
            callback(*args)
        except Exception:  # pragma: no cover - log unexpected errors
            logger.exception("Error in countdown callback")


class DeferredCall:
    """A delayed callback held until its owner runs it; used without an event loop."""

    def __init__(self, delay: float, callback: Callback) -> None:
        self.delay = max(delay, 0.0)
        self.callback = callback
        self.completed = False

    def fire(self) -> None:
        if self.completed:
            return
        self.completed = True
        self.callback()

    def cancel(self) -> None:
        self.completed = True

    def is_active(self) -> bool:
        return not self.completed


class DeferredCountdown:
    """Countdown advanced by explicit :meth:`tick` calls instead of a task."""

    def __init__(self, seconds: int, *, on_tick: TickCallback, on_expire: Callback) -> None:
        self.remaining = max(int(seconds), 0)
        self.on_tick = on_tick
        self.on_expire = on_expire
        self.completed = False

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            if self.completed or self.remaining <= 0:
                return
            self.remaining -= 1
            self.on_tick(self.remaining)
            if self.remaining == 0:
                self.completed = True
                self.on_expire()

    def cancel(self) -> None:
        self.completed = True

    def is_active(self) -> bool:
        return not self.completed


def _loop_is_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class AsyncioScheduler:
    """Default :class:`Scheduler` backed by tasks on the running event loop.

    Outside a running loop the timers are deferred instead: they are kept
    on the scheduler and fire only through :meth:`run_pending` or
    :meth:`DeferredCountdown.tick`.
    """

    def __init__(self, *, tick_interval: float = 1.0) -> None:
        self.tick_interval = tick_interval
        self.deferred: List[Union[DeferredCall, DeferredCountdown]] = []

    def call_later(self, delay: float, callback: Callback) -> Union[DelayedCall, DeferredCall]:
        if _loop_is_running():
            return DelayedCall(delay, callback)
        logger.debug("No running event loop, deferring callback due in %.1fs", delay)
        handle = DeferredCall(delay, callback)
        self.deferred.append(handle)
        return handle

    def countdown(
        self,
        seconds: int,
        *,
        on_tick: TickCallback,
        on_expire: Callback,
    ) -> Union[CountdownHandle, DeferredCountdown]:
        if _loop_is_running():
            return CountdownHandle(seconds, on_tick=on_tick, on_expire=on_expire, interval=self.tick_interval)
        handle = DeferredCountdown(seconds, on_tick=on_tick, on_expire=on_expire)
        self.deferred.append(handle)
        return handle

    def pending(self) -> List[DeferredCall]:
        """Deferred callbacks that have neither fired nor been cancelled."""

        return [handle for handle in self.deferred if isinstance(handle, DeferredCall) and handle.is_active()]

    def run_pending(self) -> int:
        """Fire every pending deferred callback in scheduling order."""

        ready = self.pending()
        for handle in ready:
            handle.fire()
        self.deferred = [handle for handle in self.deferred if handle.is_active()]
        return len(ready)


__all__ = [
    "AsyncioScheduler",
    "Cancellable",
    "CountdownHandle",
    "DeferredCall",
    "DeferredCountdown",
    "DelayedCall",
    "Scheduler",
]
