# justlog/cli/helpers.py
# Shared CLI helpers: session wiring, routine file loading, status rendering & the foreground tick loop

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config.settings import JustlogSettings
from ..core.clock import Clock, SystemClock
from ..core.duration import format_countdown
from ..core.exceptions import FileReadError, InvalidSessionError, SnapshotDecodeError
from ..core.models import SessionState, SessionUpdate, WorkoutExercise
from ..justlog_io.generics import read_json_safe
from ..justlog_io.kv_store import JsonFileStore
from ..session.manager import WorkoutSessionManager, create_session_manager
from ..session.rest_timer import RestPhase, RestTimerState
from ..session.scheduler import PollingTickScheduler

# ---------------------------------------------------------------------------
# SESSION WIRING
# ---------------------------------------------------------------------------
# Every command builds its manager through open_session(); construction runs
# recovery, so each CLI invocation resumes exactly where the last one left off.
# ---------------------------------------------------------------------------


# * Build a recovered session manager for the configured store
def open_session(
    settings: JustlogSettings,
    clock: Clock | None = None,
) -> tuple[WorkoutSessionManager, PollingTickScheduler]:
    clock = clock or SystemClock()
    scheduler = PollingTickScheduler(clock, interval=settings.tick_interval)
    manager = create_session_manager(
        JsonFileStore(settings.session_path), clock=clock, scheduler=scheduler
    )
    return manager, scheduler


# * Resolve exercises from repeated --exercise names and/or a routine JSON file
def load_exercises(
    names: Optional[Sequence[str]],
    routine_file: Optional[Path],
) -> tuple[list[WorkoutExercise], dict[str, Any]]:
    exercises: list[WorkoutExercise] = []
    meta: dict[str, Any] = {}

    if routine_file is not None:
        try:
            data = read_json_safe(routine_file)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(f"Could not read routine file: {e}", routine_file) from e
        entries = data
        if isinstance(data, dict):
            meta = {k: data[k] for k in ("routine_id", "name") if k in data}
            entries = data.get("exercises", [])
        if not isinstance(entries, list):
            raise InvalidSessionError(
                f"Routine file {routine_file} must hold a list of exercises",
                field="routine_file",
            )
        try:
            for entry in entries:
                if isinstance(entry, str):
                    exercises.append(WorkoutExercise.named(entry))
                else:
                    exercises.append(WorkoutExercise.from_dict(entry))
        except SnapshotDecodeError as e:
            raise InvalidSessionError(
                f"Invalid exercise in {routine_file}: {e}", field="routine_file"
            ) from e

    for name in names or []:
        exercises.append(WorkoutExercise.named(name))
    return exercises, meta


_STATE_STYLES = {
    SessionState.ACTIVE: "justlog.active",
    SessionState.PAUSED: "justlog.paused",
    SessionState.NO_SESSION: "justlog.muted",
}


# * Rich panel describing the current session
def render_status(update: SessionUpdate) -> Panel:
    state = update.state
    style = _STATE_STYLES[state]
    snapshot = update.snapshot

    if snapshot is None:
        return Panel(
            "[justlog.muted]No workout in progress.[/]\n"
            "[dim]Start one with[/] [justlog.accent]justlog start \"Leg Day\"[/]",
            title="Justlog",
            border_style=style,
        )

    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("Routine", f"[justlog.accent]{escape(snapshot.routine_name)}[/]")
    table.add_row("State", f"[{style}]{state.value.replace('_', ' ')}[/]")
    table.add_row("Duration", update.duration)
    table.add_row("Exercise", escape(update.current_exercise))
    table.add_row("Sets done", str(snapshot.completed_sets))
    if snapshot.exercises:
        table.add_row("Exercises", escape(", ".join(e.name for e in snapshot.exercises)))
    return Panel(table, title="Justlog", border_style=style)


# * Rich panel for the rest countdown
def render_rest(state: RestTimerState) -> Panel:
    if state.phase is RestPhase.COMPLETED:
        body = "[justlog.active]Rest complete - next set![/]"
    else:
        filled = int(state.progress * 20)
        bar = "#" * filled + "-" * (20 - filled)
        body = f"[justlog.accent]{format_countdown(state.remaining)}[/] [dim]{bar}[/]"
    return Panel(body, title="Rest", border_style="justlog.accent")


# * JSON-friendly status payload
def status_payload(update: SessionUpdate) -> dict[str, Any]:
    return {
        "state": update.state.value,
        "duration": update.duration,
        "current_exercise": update.current_exercise,
        "is_active": update.is_active,
        "session": update.snapshot.to_dict() if update.snapshot else None,
    }


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2)


# * Drive a polling scheduler from the foreground until it stops or max_ticks fire
def run_tick_loop(
    scheduler: PollingTickScheduler,
    max_ticks: int = 0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    fired = 0
    try:
        while scheduler.is_running:
            wait = scheduler.seconds_until_next()
            if wait is None:
                break
            sleep(min(wait, scheduler.interval))
            if scheduler.poll():
                fired += 1
                if max_ticks and fired >= max_ticks:
                    break
    except KeyboardInterrupt:
        pass
    return fired
