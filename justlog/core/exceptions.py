# justlog/core/exceptions.py
# Custom exception hierarchy for Justlog (pure - no I/O operations)

from pathlib import Path
from typing import Any


# * Format error message for display (pure string formatting, no I/O)
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


# * Base exception for Justlog application
class JustlogError(Exception):
    pass


# * Workout session errors
class SessionError(JustlogError):
    pass


# * Command arguments that can never form a valid session (e.g. blank routine name)
class InvalidSessionError(SessionError):
    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, field={self.field!r})"


# * Base error for local session persistence
class PersistenceError(JustlogError):
    pass


# * Persisted record could not be read from the store
class StoreReadError(PersistenceError):
    pass


# * Persisted record could not be written to the store
class StoreWriteError(PersistenceError):
    def __init__(self, message: str, keys: list[str] | None = None):
        super().__init__(message)
        self.keys = keys or []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, keys={self.keys!r})"


# * Persisted snapshot has missing or mistyped fields
class SnapshotDecodeError(PersistenceError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, field={self.field!r})"


# * Configuration errors
class ConfigurationError(JustlogError):
    pass


# * Settings value validation failed
class SettingsValidationError(ConfigurationError):
    def __init__(self, message: str, setting_name: str, value: Any):
        super().__init__(message)
        self.setting_name = setting_name
        self.value = value

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"setting_name={self.setting_name!r}, value={self.value!r})"
        )


# * JSON parsing errors
class JSONParsingError(JustlogError):
    pass


# * Base error for file I/O operations
class FileOperationError(JustlogError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"


# * Failed to read file
class FileReadError(FileOperationError):
    pass
