# justlog/session/manager.py
# Workout session state machine: owns the live snapshot & timing state, persists every transition
#
# * Commands never raise for an invalid state; they are silent no-ops
# * Persistence is best-effort: write failures are logged & ignored
# * Every mutation & every tick publishes a SessionUpdate to observers

from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..core.clock import Clock, SystemClock
from ..core.debug import debug_error
from ..core.duration import elapsed_seconds, format_duration
from ..core.exceptions import InvalidSessionError, StoreWriteError
from ..core.models import (
    FinishedWorkout,
    SessionSnapshot,
    SessionState,
    SessionUpdate,
    TimingState,
    WorkoutExercise,
    first_exercise_name,
)
from ..core.output import get_output_manager
from ..core.verbose import vlog, vlog_session
from ..justlog_io.kv_store import KeyValueStore
from .persistence import SessionPersistence
from .recovery import RecoveredSession, recover_session
from .scheduler import PollingTickScheduler, TickScheduler

DEFAULT_ROUTINE_LABEL = "Workout"
DEFAULT_EXERCISE_LABEL = "Ready to start"

SessionObserver = Callable[[SessionUpdate], None]


class WorkoutSessionManager:
    """Single owner of the in-progress workout.

    Transitions: NO_SESSION -start-> ACTIVE <-pause/resume-> PAUSED, and
    finish/discard from either back to NO_SESSION. Elapsed time excludes every
    paused interval; the paused total only grows on resume.

    Build instances through create_session_manager() so recovery runs before
    the first command.
    """

    def __init__(
        self,
        persistence: SessionPersistence,
        clock: Clock,
        scheduler: TickScheduler,
    ):
        self._persistence = persistence
        self._clock = clock
        self._scheduler = scheduler
        self._snapshot: Optional[SessionSnapshot] = None
        self._timing = TimingState()
        self._observers: list[SessionObserver] = []
        self._recovered = False

    # ------------------------------------------------------------------
    # recovery

    # * Rebuild state from the store; runs at most once per manager
    def recover(self) -> Optional[RecoveredSession]:
        if self._recovered:
            return None
        self._recovered = True

        recovered = recover_session(self._persistence, self._clock)
        if recovered is None:
            return None

        self._snapshot = recovered.snapshot
        self._timing = recovered.timing
        if recovered.is_active:
            self._scheduler.start(self._on_tick)
        vlog_session("recover", SessionState.NO_SESSION.value, recovered.state.value)
        self._publish()
        return recovered

    # ------------------------------------------------------------------
    # commands

    # * Start a new session; always replaces any prior one
    def start(
        self,
        routine_name: str,
        exercises: Sequence[WorkoutExercise] = (),
        routine_id: Optional[str] = None,
    ) -> SessionSnapshot:
        if not routine_name or not routine_name.strip():
            raise InvalidSessionError("Routine name must not be blank", field="routine_name")

        before = self.state
        now = self._clock.now()
        exercises = tuple(exercises)
        self._timing = TimingState()
        self._snapshot = SessionSnapshot(
            routine_id=routine_id,
            routine_name=routine_name,
            exercises=exercises,
            start_time=now,
            is_active=True,
            current_exercise=first_exercise_name(exercises),
            paused_at=None,
            completed_sets=0,
        )
        self._persist()
        self._scheduler.start(self._on_tick)
        vlog_session(
            "start", before.value, SessionState.ACTIVE.value,
            f"{routine_name} w/ {len(exercises)} exercises",
        )
        self._publish()
        return self._snapshot

    def pause(self) -> None:
        snapshot = self._snapshot
        if snapshot is None or not snapshot.is_active:
            return

        now = self._clock.now()
        self._timing = TimingState(cumulative_paused=self._timing.cumulative_paused, last_pause=now)
        self._snapshot = snapshot.with_changes(is_active=False, paused_at=now)
        self._persist()
        self._scheduler.stop()
        vlog_session("pause", SessionState.ACTIVE.value, SessionState.PAUSED.value)
        self._publish()

    def resume(self) -> None:
        snapshot = self._snapshot
        if snapshot is None or snapshot.is_active:
            return

        paused_total = self._timing.cumulative_paused
        if self._timing.last_pause is not None:
            pause_length = max(0.0, self._clock.now() - self._timing.last_pause)
            paused_total += pause_length
            vlog("SESSION", f"Added pause of {pause_length:.1f}s, total paused {paused_total:.1f}s")
        self._timing = TimingState(cumulative_paused=paused_total, last_pause=None)
        self._snapshot = snapshot.with_changes(is_active=True, paused_at=None)
        self._persist()
        self._scheduler.start(self._on_tick)
        vlog_session("resume", SessionState.PAUSED.value, SessionState.ACTIVE.value)
        self._publish()

    # * End the session & hand back a summary for the history collaborator
    def finish(self) -> Optional[FinishedWorkout]:
        snapshot = self._snapshot
        if snapshot is None:
            return None
        summary = FinishedWorkout(
            snapshot=snapshot,
            active_seconds=self.elapsed_seconds(),
            finished_at=self._clock.now(),
        )
        self._clear("finish")
        return summary

    def discard(self) -> None:
        if self._snapshot is None:
            return
        self._clear("discard")

    def update_current_exercise(self, name: str) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        self._snapshot = snapshot.with_changes(current_exercise=name)
        self._persist()
        self._publish()

    def add_completed_set(self) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        self._snapshot = snapshot.with_changes(completed_sets=snapshot.completed_sets + 1)
        self._persist()
        self._publish()

    # * Replace routine identity & exercises, keeping timing & focus
    def update_session(
        self,
        routine_name: str,
        exercises: Sequence[WorkoutExercise] = (),
        routine_id: Optional[str] = None,
    ) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        if not routine_name or not routine_name.strip():
            raise InvalidSessionError("Routine name must not be blank", field="routine_name")
        self._snapshot = snapshot.with_changes(
            routine_id=routine_id,
            routine_name=routine_name,
            exercises=exercises,
        )
        self._persist()
        vlog("SESSION", f"Session updated: {routine_name}", f"exercises: {len(exercises)}")
        self._publish()

    # ------------------------------------------------------------------
    # queries

    @property
    def state(self) -> SessionState:
        if self._snapshot is None:
            return SessionState.NO_SESSION
        return self._snapshot.state

    def is_active(self) -> bool:
        return self._snapshot is not None and self._snapshot.is_active

    def has_session(self) -> bool:
        return self._snapshot is not None

    def current_snapshot(self) -> Optional[SessionSnapshot]:
        return self._snapshot

    def timing(self) -> TimingState:
        return self._timing

    def elapsed_seconds(self) -> float:
        snapshot = self._snapshot
        if snapshot is None:
            return 0.0
        return elapsed_seconds(
            self._clock.now(),
            snapshot.start_time,
            self._timing.cumulative_paused,
            self._timing.last_pause,
            snapshot.is_active,
        )

    def formatted_duration(self) -> str:
        return format_duration(self.elapsed_seconds())

    def routine_name(self) -> str:
        if self._snapshot is None:
            return DEFAULT_ROUTINE_LABEL
        return self._snapshot.routine_name

    def current_exercise_name(self) -> str:
        if self._snapshot is None or self._snapshot.current_exercise is None:
            return DEFAULT_EXERCISE_LABEL
        return self._snapshot.current_exercise

    def current_update(self) -> SessionUpdate:
        return SessionUpdate(
            duration=self.formatted_duration(),
            current_exercise=self.current_exercise_name(),
            is_active=self.is_active(),
            snapshot=self._snapshot,
        )

    # ------------------------------------------------------------------
    # observers

    # * Register an observer; returns a callable that unsubscribes it
    def subscribe(self, observer: SessionObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ------------------------------------------------------------------
    # internals

    def _on_tick(self) -> None:
        if not self.is_active():
            return
        self._publish()

    def _publish(self) -> None:
        update = self.current_update()
        for observer in list(self._observers):
            try:
                observer(update)
            except Exception as e:
                debug_error(e, "Session observer failed")

    def _persist(self) -> None:
        assert self._snapshot is not None
        try:
            self._persistence.save(self._snapshot, self._timing)
        except StoreWriteError as e:
            get_output_manager().warning(f"Session not saved, keeping in-memory state: {e}")
            debug_error(e, "Persist session")

    def _clear(self, command: str) -> None:
        before = self.state
        self._scheduler.stop()
        self._snapshot = None
        self._timing = TimingState()
        try:
            self._persistence.erase()
        except StoreWriteError as e:
            get_output_manager().warning(f"Saved session could not be erased: {e}")
            debug_error(e, "Erase session")
        vlog_session(command, before.value, SessionState.NO_SESSION.value)
        self._publish()


# * Single creation point: wire store, clock & scheduler, then run recovery
def create_session_manager(
    store: KeyValueStore,
    clock: Clock | None = None,
    scheduler: TickScheduler | None = None,
) -> WorkoutSessionManager:
    clock = clock or SystemClock()
    manager = WorkoutSessionManager(
        persistence=SessionPersistence(store),
        clock=clock,
        scheduler=scheduler or PollingTickScheduler(clock),
    )
    manager.recover()
    return manager
