# justlog/cli/commands/session.py
# Session commands: start/pause/resume/finish/discard/exercise/add-set/update/status

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.live import Live
from rich.markup import escape

from ...config.settings import JustlogSettings, get_settings
from ...core.models import SessionState
from ...justlog_io.console import console, get_console
from ..app import app
from ..decorators import handle_justlog_error
from ..helpers import (
    dump_json,
    load_exercises,
    open_session,
    render_status,
    run_tick_loop,
    status_payload,
)


# * Print the current session panel (used by bare `justlog` & after each command)
def show_status(settings: JustlogSettings) -> None:
    manager, _ = open_session(settings)
    console.print(render_status(manager.current_update()))


# print a hint when a command was a no-op for the current state
def _noop_hint(state: SessionState, command: str) -> None:
    console.print(f"[justlog.muted]Nothing to {command}: session is {state.value.replace('_', ' ')}.[/]")


@app.command(help="Start a new workout (replaces any session in progress).")
@handle_justlog_error
def start(
    ctx: typer.Context,
    routine_name: Optional[str] = typer.Argument(
        None, help="Routine name (defaults to the routine file's name)"
    ),
    exercise: Optional[List[str]] = typer.Option(
        None, "--exercise", "-e", help="Exercise name; repeat for several"
    ),
    routine_file: Optional[Path] = typer.Option(
        None, "--routine-file", "-f", exists=True, readable=True,
        help="JSON routine: a list of exercises or {routine_id, name, exercises}",
    ),
    routine_id: Optional[str] = typer.Option(None, "--routine-id", help="Originating routine id"),
) -> None:
    settings = get_settings(ctx)
    exercises, meta = load_exercises(exercise, routine_file)
    name = routine_name or meta.get("name") or ""
    manager, _ = open_session(settings)

    replaced = manager.has_session()
    manager.start(name, exercises, routine_id=routine_id or meta.get("routine_id"))
    if replaced:
        console.print("[yellow]Previous session replaced.[/]")
    console.print(render_status(manager.current_update()))


@app.command(help="Pause the active workout; the duration stops advancing.")
@handle_justlog_error
def pause(ctx: typer.Context) -> None:
    manager, _ = open_session(get_settings(ctx))
    if manager.state is not SessionState.ACTIVE:
        _noop_hint(manager.state, "pause")
    manager.pause()
    console.print(render_status(manager.current_update()))


@app.command(help="Resume a paused workout.")
@handle_justlog_error
def resume(ctx: typer.Context) -> None:
    manager, _ = open_session(get_settings(ctx))
    if manager.state is not SessionState.PAUSED:
        _noop_hint(manager.state, "resume")
    manager.resume()
    console.print(render_status(manager.current_update()))


@app.command(help="Finish the workout and print its summary.")
@handle_justlog_error
def finish(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print the summary as JSON"),
) -> None:
    manager, _ = open_session(get_settings(ctx))
    summary = manager.finish()
    if summary is None:
        _noop_hint(SessionState.NO_SESSION, "finish")
        return
    if json_output:
        typer.echo(dump_json(summary.to_dict()))
        return
    console.print(
        f"[justlog.active]Finished[/] [justlog.accent]{escape(summary.snapshot.routine_name)}[/] "
        f"in {summary.duration} "
        f"[dim]({summary.snapshot.completed_sets} sets)[/]"
    )


@app.command(help="Throw the current workout away without a summary.")
@handle_justlog_error
def discard(ctx: typer.Context) -> None:
    manager, _ = open_session(get_settings(ctx))
    if not manager.has_session():
        _noop_hint(SessionState.NO_SESSION, "discard")
        return
    name = manager.routine_name()
    manager.discard()
    console.print(f"[yellow]Discarded[/] [justlog.accent]{escape(name)}[/]")


@app.command("exercise", help="Set the exercise currently in focus.")
@handle_justlog_error
def set_exercise(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exercise now in focus"),
) -> None:
    manager, _ = open_session(get_settings(ctx))
    if not manager.has_session():
        _noop_hint(SessionState.NO_SESSION, "update")
        return
    manager.update_current_exercise(name)
    console.print(render_status(manager.current_update()))


@app.command("add-set", help="Record one completed set.")
@handle_justlog_error
def add_set(ctx: typer.Context) -> None:
    manager, _ = open_session(get_settings(ctx))
    if not manager.has_session():
        _noop_hint(SessionState.NO_SESSION, "update")
        return
    manager.add_completed_set()
    console.print(render_status(manager.current_update()))


@app.command(help="Replace the routine name & exercises, keeping the timer running.")
@handle_justlog_error
def update(
    ctx: typer.Context,
    routine_name: str = typer.Argument(..., help="New routine name"),
    exercise: Optional[List[str]] = typer.Option(
        None, "--exercise", "-e", help="Exercise name; repeat for several"
    ),
    routine_file: Optional[Path] = typer.Option(
        None, "--routine-file", "-f", exists=True, readable=True,
        help="JSON routine: a list of exercises or {routine_id, name, exercises}",
    ),
    routine_id: Optional[str] = typer.Option(None, "--routine-id", help="Originating routine id"),
) -> None:
    manager, _ = open_session(get_settings(ctx))
    if not manager.has_session():
        _noop_hint(SessionState.NO_SESSION, "update")
        return
    exercises, meta = load_exercises(exercise, routine_file)
    manager.update_session(routine_name, exercises, routine_id=routine_id or meta.get("routine_id"))
    console.print(render_status(manager.current_update()))


@app.command(help="Show the current workout.")
@handle_justlog_error
def status(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Print status as JSON"),
    follow: bool = typer.Option(False, "--follow", "-F", help="Keep refreshing while active"),
    ticks: int = typer.Option(0, "--ticks", min=0, help="Stop following after N ticks (0 = Ctrl+C)"),
) -> None:
    manager, scheduler = open_session(get_settings(ctx))

    if json_output:
        typer.echo(dump_json(status_payload(manager.current_update())))
        return

    if not follow or not manager.is_active():
        console.print(render_status(manager.current_update()))
        return

    with Live(render_status(manager.current_update()), console=get_console()) as live:
        unsubscribe = manager.subscribe(lambda update: live.update(render_status(update)))
        try:
            run_tick_loop(scheduler, max_ticks=ticks)
        finally:
            unsubscribe()
            scheduler.stop()
