# justlog/cli/app.py
# Root Typer application & command registration
#
# ! Command imports at bottom of file are deferred to avoid circular dependencies.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# load environment variables (e.g. JUSTLOG_HOME) once at startup
load_dotenv()

from ..config.settings import JustlogSettings, settings_manager


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    help="Track an in-progress workout across pauses, resumes & restarts.",
    context_settings={"help_option_names": ["--help", "-h"]},
)


# * Load settings & initialize output before any subcommand runs
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging of session transitions"
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Include debug output (implies --verbose)"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress warnings"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Write verbose logs to file (enables verbose mode)"
    ),
) -> None:
    # respect injected ctx.obj from tests/embedding; only load if absent
    if getattr(ctx, "obj", None) is None:
        ctx.obj = settings_manager.load()

    from ..core.verbose import cleanup_verbose, init_verbose, vlog_config

    # log_file & debug imply verbose mode
    verbose_enabled = verbose or debug or log_file is not None
    init_verbose(enabled=verbose_enabled, log_file=log_file, debug=debug, quiet=quiet)
    ctx.call_on_close(cleanup_verbose)
    if isinstance(ctx.obj, JustlogSettings):
        vlog_config("session_path", ctx.obj.session_path)
        vlog_config("tick_interval", ctx.obj.tick_interval)

    if ctx.invoked_subcommand is None:
        # bare `justlog` shows the current session
        from .commands.session import show_status

        show_status(ctx.obj)
        ctx.exit()


# ! import command modules here to avoid circular import w/ app object
from .commands import session as _session  # noqa: F401
from .commands import rest as _rest  # noqa: F401
from .commands import config as _config  # noqa: F401
