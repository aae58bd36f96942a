# justlog/cli/output_manager.py
# Unified output management implementation for debug, verbose & quiet modes

# * Real implementation w/ Rich console output & optional plain-text file logging
# * Registered via set_output_manager() at CLI startup

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from rich.markup import escape

from ..core.output import OutputLevel


class OutputManager:
    # Implements OutputInterface for use w/ the core registry

    def __init__(self) -> None:
        self._level = OutputLevel.NORMAL
        self._debug_allowed = False
        self._run_start: float | None = None
        self._log_file_path: Path | None = None
        self._log_file_handle: Any = None

    def initialize(
        self,
        requested_level: OutputLevel = OutputLevel.NORMAL,
        debug: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> None:
        # Args: requested_level (desired output level), debug (required for DEBUG),
        # quiet (forces QUIET level), log_file (optional path to write logs)
        self._debug_allowed = debug
        self._level = self._compute_effective_level(requested_level, debug, quiet)
        self._run_start = time.time()
        self._setup_log_file(log_file)

    def _compute_effective_level(
        self, requested: OutputLevel, debug: bool, quiet: bool
    ) -> OutputLevel:
        # Precedence: 1. --quiet overrides everything -> QUIET
        # 2. DEBUG requires the debug flag -> cap at VERBOSE otherwise
        # 3. Otherwise use requested level
        if quiet:
            return OutputLevel.QUIET
        max_allowed = OutputLevel.DEBUG if debug else OutputLevel.VERBOSE
        return min(requested, max_allowed)

    # OutputInterface implementation

    def get_level(self) -> OutputLevel:
        return self._level

    def is_debug_enabled(self) -> bool:
        return self._level >= OutputLevel.DEBUG

    def is_verbose_enabled(self) -> bool:
        return self._level >= OutputLevel.VERBOSE

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None:
        if self._level >= OutputLevel.DEBUG:
            from ..justlog_io.console import console

            console.print(f"[debug]\\[{category}][/] {escape(msg)}", **kwargs)
            self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")

    def verbose(
        self,
        msg: str,
        category: str = "INFO",
        detail: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if self._level >= OutputLevel.VERBOSE:
            from ..justlog_io.console import console

            prefix = f"[dim]\\[{self._elapsed()}][/] [bold cyan]\\[{category}][/]"
            console.print(f"{prefix} {escape(msg)}", **kwargs)
            if detail:
                for line in detail.split("\n"):
                    console.print(f"  [dim]{escape(line)}[/]")
            self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")
            if detail:
                for line in detail.split("\n"):
                    self._write_to_file(f"  {line}")

    def info(self, msg: str, **kwargs: Any) -> None:
        if self._level >= OutputLevel.NORMAL:
            from ..justlog_io.console import console

            console.print(msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        if self._level >= OutputLevel.NORMAL:
            from ..justlog_io.console import console

            console.print(f"[yellow]Warning:[/] {escape(msg)}", **kwargs)
        self._write_to_file(f"[{self._elapsed()}] [WARNING] {msg}")

    def begin_run(self) -> None:
        self._run_start = time.time()
        if self._log_file_handle:
            self._write_to_file(f"\n{'='*60}")
            self._write_to_file(f"Run Started: {datetime.now().isoformat()}")
            self._write_to_file(f"Level: {self._level.name}")
            self._write_to_file(f"{'='*60}\n")

    def end_run(self) -> None:
        if self._log_file_handle:
            self._write_to_file(f"\n{'='*60}")
            self._write_to_file(f"Run Ended: {datetime.now().isoformat()}")
            self._write_to_file(f"{'='*60}\n")
        self.cleanup()

    # File logging

    def _elapsed(self) -> str:
        if self._run_start is None:
            return "0.00s"
        return f"{time.time() - self._run_start:.2f}s"

    def _setup_log_file(self, log_file: Path | None) -> None:
        self.cleanup()

        self._log_file_path = log_file
        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._log_file_handle = open(log_file, "a", encoding="utf-8")
            except OSError:
                self._log_file_path = None
                self._log_file_handle = None

    def _write_to_file(self, msg: str) -> None:
        if self._log_file_handle is not None:
            try:
                self._log_file_handle.write(f"{msg}\n")
                self._log_file_handle.flush()
            except OSError:
                pass

    def cleanup(self) -> None:
        if self._log_file_handle is not None:
            try:
                self._log_file_handle.close()
            except OSError:
                pass
            self._log_file_handle = None
