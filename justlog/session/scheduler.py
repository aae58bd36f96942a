# justlog/session/scheduler.py
# Cancellable periodic tick tasks injected into the session manager & rest timer
#
# * At most one pending timer per scheduler; start() always cancels the previous one first
# * stop() is idempotent & side-effect free when nothing is scheduled

from __future__ import annotations

from threading import Timer
from typing import Callable, Optional, Protocol, runtime_checkable

from ..core.clock import Clock, SystemClock
from ..core.debug import debug_error

TickCallback = Callable[[], None]

DEFAULT_TICK_INTERVAL = 1.0


# * Periodic task capability (start/stop)
@runtime_checkable
class TickScheduler(Protocol):
    @property
    def is_running(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...


# run a tick callback; a failing observer chain must not kill the timer
def _run_tick(callback: TickCallback) -> None:
    try:
        callback()
    except Exception as e:
        debug_error(e, "Tick callback failed")


# * Re-arming threading.Timer; the callback runs on the timer thread
class ThreadTickScheduler:

    def __init__(self, interval: float = DEFAULT_TICK_INTERVAL):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.interval = interval
        self._timer: Timer | None = None
        self._callback: Optional[TickCallback] = None
        # bumped on every start/stop so stale timers never re-arm
        self._generation = 0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self.stop()
        self._callback = callback
        self._arm(self._generation)

    def stop(self) -> None:
        if self._timer:
            self._timer.cancel()
        self._timer = None
        self._callback = None
        self._generation += 1

    def _arm(self, generation: int) -> None:
        timer = Timer(self.interval, self._fire, args=[generation])
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        callback = self._callback
        if generation != self._generation or callback is None:
            return
        _run_tick(callback)
        if generation == self._generation:
            self._arm(generation)


# * Tick source driven by the host loop calling poll(); everything stays on the caller's thread
class PollingTickScheduler:

    def __init__(
        self,
        clock: Clock | None = None,
        interval: float = DEFAULT_TICK_INTERVAL,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self.clock = clock or SystemClock()
        self.interval = interval
        self._callback: Optional[TickCallback] = None
        self._next_due: float | None = None

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self.stop()
        self._callback = callback
        self._next_due = self.clock.now() + self.interval

    def stop(self) -> None:
        self._callback = None
        self._next_due = None

    # seconds the host may sleep before the next tick is due (None when stopped)
    def seconds_until_next(self) -> float | None:
        if self._next_due is None:
            return None
        return max(0.0, self._next_due - self.clock.now())

    # * Fire the callback if a tick is due; missed periods are coalesced into one tick
    def poll(self) -> bool:
        callback = self._callback
        if callback is None or self._next_due is None:
            return False

        now = self.clock.now()
        if now < self._next_due:
            return False

        missed = int((now - self._next_due) // self.interval) + 1
        self._next_due += missed * self.interval
        _run_tick(callback)
        return True
