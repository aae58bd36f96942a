# justlog/justlog_io/console.py
# Centralized console management for the entire Justlog application

# A single Console proxy that all modules import for consistent output.
# - Console is created as a bare Console() at import time
# - The _ConsoleProxy pattern allows reconfiguring/resetting without breaking module-level references
# - Tests: use reset_console() for isolation

from __future__ import annotations
from typing import Any
from rich.console import Console
from rich.theme import Theme


# styles referenced as [justlog.*] markup across the CLI
JUSTLOG_THEME = Theme(
    {
        "justlog.accent": "bold cyan",
        "justlog.active": "bold green",
        "justlog.paused": "bold yellow",
        "justlog.muted": "dim",
        "debug": "magenta",
    }
)


# proxy delegating to underlying Console instance; all Console methods forwarded via __getattr__
class _ConsoleProxy:
    __slots__ = ("_console",)

    def __init__(self) -> None:
        self._console = Console(theme=JUSTLOG_THEME)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)

    def _set_console(self, new_console: Console) -> None:
        self._console = new_console

    def _get_console(self) -> Console:
        return self._console


# single proxy instance used by all modules
console = _ConsoleProxy()


# * Get the underlying Console instance
def get_console() -> Console:
    # handle both proxy & direct Console (e.g., when patched in tests)
    if hasattr(console, "_get_console"):
        return console._get_console()
    return console  # type: ignore[return-value]


# * Reset console to default configuration (useful for tests)
def reset_console() -> Console:
    console._set_console(Console(theme=JUSTLOG_THEME))
    return console._get_console()


__all__ = [
    "console",
    "get_console",
    "reset_console",
    "JUSTLOG_THEME",
]
