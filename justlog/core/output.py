# justlog/core/output.py
# Output registry shared by the session core & the CLI
# * The session manager, recovery & store report through get_output_manager() & never touch a console
# * Until the CLI registers its Rich-backed OutputManager every call lands in NullOutputManager
# * A "run" is one CLI invocation; it is unrelated to the workout session being tracked

from __future__ import annotations

from enum import IntEnum
from typing import Protocol, Any, runtime_checkable, Optional


# * How chatty a CLI run is: --quiet, default, --verbose, --verbose --debug
class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


# * What the core may call; categories are SESSION, STORE, RECOVER, CONFIG & FILE
@runtime_checkable
class OutputInterface(Protocol):
    def get_level(self) -> OutputLevel: ...

    def is_debug_enabled(self) -> bool: ...

    def is_verbose_enabled(self) -> bool: ...

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None: ...

    def verbose(
        self, msg: str, category: str = "INFO", detail: Optional[str] = None, **kwargs: Any
    ) -> None: ...

    def info(self, msg: str, **kwargs: Any) -> None: ...

    # best-effort failures the user should see even w/o --verbose (e.g. a session write that did not land)
    def warning(self, msg: str, **kwargs: Any) -> None: ...

    def begin_run(self) -> None: ...

    def end_run(self) -> None: ...


# * Silent sink; library use & tests get no output unless they register a manager
class NullOutputManager:
    def get_level(self) -> OutputLevel:
        return OutputLevel.NORMAL

    def is_debug_enabled(self) -> bool:
        return False

    def is_verbose_enabled(self) -> bool:
        return False

    def debug(self, msg: str, category: str = "DEBUG", **kwargs: Any) -> None:
        return None

    def verbose(
        self, msg: str, category: str = "INFO", detail: Optional[str] = None, **kwargs: Any
    ) -> None:
        return None

    def info(self, msg: str, **kwargs: Any) -> None:
        return None

    def warning(self, msg: str, **kwargs: Any) -> None:
        return None

    def begin_run(self) -> None:
        return None

    def end_run(self) -> None:
        return None


_output_manager: OutputInterface = NullOutputManager()


# * Install the manager for this run (init_verbose does this from the CLI callback)
def set_output_manager(manager: OutputInterface) -> None:
    global _output_manager
    _output_manager = manager


def get_output_manager() -> OutputInterface:
    return _output_manager


# * Back to the silent sink; used by test isolation
def reset_output_manager() -> None:
    global _output_manager
    _output_manager = NullOutputManager()
