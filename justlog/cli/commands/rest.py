# justlog/cli/commands/rest.py
# Foreground rest countdown between sets

from __future__ import annotations

from typing import Optional

import typer
from rich.live import Live

from ...config.settings import get_settings
from ...core.clock import SystemClock
from ...justlog_io.console import console, get_console
from ...session.rest_timer import RestPhase, RestTimer
from ...session.scheduler import PollingTickScheduler
from ..app import app
from ..decorators import handle_justlog_error
from ..helpers import render_rest, run_tick_loop


@app.command(help="Count down a rest period between sets.")
@handle_justlog_error
def rest(
    ctx: typer.Context,
    seconds: Optional[int] = typer.Argument(
        None, min=1, help="Rest length in seconds (default: default_rest_seconds setting)"
    ),
) -> None:
    settings = get_settings(ctx)
    duration = seconds or settings.default_rest_seconds

    # the countdown removes one second per tick
    scheduler = PollingTickScheduler(SystemClock(), interval=1.0)
    timer = RestTimer(scheduler, on_final_second=lambda _remaining: console.bell())

    with Live(console=get_console()) as live:
        unsubscribe = timer.subscribe(lambda state: live.update(render_rest(state)))
        try:
            timer.start(duration)
            run_tick_loop(scheduler)
        finally:
            unsubscribe()

    if timer.state.phase is RestPhase.COMPLETED:
        console.print("[justlog.active]Rest complete.[/]")
    else:
        timer.stop()
        console.print("[yellow]Rest cancelled.[/]")
