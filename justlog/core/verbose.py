# justlog/core/verbose.py
# Verbose logging utilities - delegates to unified OutputManager w/ structured logging for session transitions, store I/O & recovery

from __future__ import annotations

from pathlib import Path
from typing import Any

from .output import get_output_manager, set_output_manager, OutputLevel


# * Initialize verbose logging for a CLI invocation
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    debug: bool = False,
    quiet: bool = False,
) -> None:
    if enabled and debug:
        requested_level = OutputLevel.DEBUG
    elif enabled:
        requested_level = OutputLevel.VERBOSE
    else:
        requested_level = OutputLevel.NORMAL

    try:
        from ..cli.output_manager import OutputManager

        manager = OutputManager()
        manager.initialize(
            requested_level=requested_level,
            debug=debug,
            quiet=quiet,
            log_file=log_file,
        )
        manager.begin_run()
        set_output_manager(manager)
    except ImportError:
        pass


# * Check if verbose logging is enabled
def is_verbose_enabled() -> bool:
    return get_output_manager().is_verbose_enabled()


# * Core verbose logging function
def vlog(category: str, message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, category, detail)


# * Log a session state transition
def vlog_session(command: str, before: str, after: str, detail: str | None = None) -> None:
    get_output_manager().verbose(f"{command}: {before} -> {after}", "SESSION", detail)


# * Log a write to the session store
def vlog_store_write(keys: list[str], location: str | None = None) -> None:
    where = f" to {location}" if location else ""
    get_output_manager().verbose(
        f"Persisted {len(keys)} keys{where}", "STORE", ", ".join(sorted(keys))
    )


# * Log erasure of the session store
def vlog_store_clear(location: str | None = None) -> None:
    where = f" at {location}" if location else ""
    get_output_manager().verbose(f"Erased session record{where}", "STORE")


# * Log the outcome of startup recovery
def vlog_recovery(result: str, detail: str | None = None) -> None:
    get_output_manager().verbose(result, "RECOVER", detail)


# * Log file read operation
def vlog_file_read(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    get_output_manager().verbose(f"Read: {path}{size_str}", "FILE")


# * Log file write operation
def vlog_file_write(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    get_output_manager().verbose(f"Write: {path}{size_str}", "FILE")


# * Log configuration values being used
def vlog_config(key: str, value: Any) -> None:
    get_output_manager().verbose(f"{key} = {value}", "CONFIG")


# * Cleanup verbose logging
def cleanup_verbose() -> None:
    get_output_manager().end_run()

