# justlog/session/rest_timer.py
# Countdown between sets, ticked once per second by an injected TickScheduler

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..core.debug import debug_error
from ..core.verbose import vlog
from .scheduler import TickScheduler

# remaining seconds at which the final-seconds hook fires
FINAL_SECONDS = 3


class RestPhase(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


# * Snapshot of the countdown published to observers
@dataclass(frozen=True)
class RestTimerState:
    phase: RestPhase
    remaining: float = 0.0
    total: float = 0.0

    @property
    def is_running(self) -> bool:
        return self.phase is RestPhase.ACTIVE

    @property
    def is_paused(self) -> bool:
        return self.phase is RestPhase.PAUSED

    # fraction of the rest period already elapsed, 0.0-1.0
    @property
    def progress(self) -> float:
        if self.total <= 0:
            return 1.0 if self.phase is RestPhase.COMPLETED else 0.0
        return min(1.0, max(0.0, (self.total - self.remaining) / self.total))


INACTIVE = RestTimerState(RestPhase.INACTIVE)


class RestTimer:

    def __init__(
        self,
        scheduler: TickScheduler,
        on_final_second: Optional[Callable[[int], None]] = None,
    ):
        self._scheduler = scheduler
        self._on_final_second = on_final_second
        self._state = INACTIVE
        self._observers: list[Callable[[RestTimerState], None]] = []

    @property
    def state(self) -> RestTimerState:
        return self._state

    @property
    def remaining(self) -> float:
        return self._state.remaining

    def subscribe(self, observer: Callable[[RestTimerState], None]) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # * Start a fresh countdown, replacing any running one
    def start(self, duration: float) -> None:
        if duration <= 0:
            raise ValueError(f"rest duration must be > 0, got {duration}")
        self._scheduler.stop()
        self._set(RestTimerState(RestPhase.ACTIVE, remaining=float(duration), total=float(duration)))
        self._scheduler.start(self._tick)
        vlog("REST", f"Rest timer started for {duration:g}s")

    def pause(self) -> None:
        if self._state.phase is not RestPhase.ACTIVE:
            return
        self._scheduler.stop()
        self._set(RestTimerState(RestPhase.PAUSED, self._state.remaining, self._state.total))

    def resume(self) -> None:
        if self._state.phase is not RestPhase.PAUSED:
            return
        self._set(RestTimerState(RestPhase.ACTIVE, self._state.remaining, self._state.total))
        self._scheduler.start(self._tick)

    def toggle(self) -> None:
        if self._state.phase is RestPhase.ACTIVE:
            self.pause()
        elif self._state.phase is RestPhase.PAUSED:
            self.resume()

    def stop(self) -> None:
        self._scheduler.stop()
        self._set(INACTIVE)

    # reset is an alias kept for callers that think in "reset" terms
    def reset(self) -> None:
        self.stop()

    def _tick(self) -> None:
        state = self._state
        if state.phase is not RestPhase.ACTIVE:
            return

        remaining = state.remaining - 1
        if remaining <= 0:
            self._scheduler.stop()
            self._set(RestTimerState(RestPhase.COMPLETED, 0.0, state.total))
            vlog("REST", "Rest timer completed")
            return

        if remaining <= FINAL_SECONDS and self._on_final_second is not None:
            try:
                self._on_final_second(int(remaining))
            except Exception as e:
                debug_error(e, "Rest timer final-second hook failed")
        self._set(RestTimerState(RestPhase.ACTIVE, remaining, state.total))

    def _set(self, state: RestTimerState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                debug_error(e, "Rest timer observer failed")
