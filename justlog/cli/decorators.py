# justlog/cli/decorators.py
# CLI decorator for uniform Justlog error handling w/ Rich output

import functools
from typing import Callable, TypeVar, Any, cast

from rich.markup import escape

from ..core.exceptions import (
    JustlogError,
    SessionError,
    PersistenceError,
    ConfigurationError,
    JSONParsingError,
    FileOperationError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])


# * Decorator for handling Justlog errors in CLI commands w/ Rich output
def handle_justlog_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..justlog_io.console import console

        try:
            return func(*args, **kwargs)
        except SessionError as e:
            console.print(format_error_message("Session Error", escape(str(e))))
            raise SystemExit(1)
        except PersistenceError as e:
            console.print(format_error_message("Storage Error", escape(str(e))))
            raise SystemExit(1)
        except ConfigurationError as e:
            console.print(format_error_message("Configuration Error", escape(str(e))))
            raise SystemExit(1)
        except JSONParsingError as e:
            console.print(format_error_message("JSON Parsing Error", escape(str(e))))
            raise SystemExit(1)
        except FileOperationError as e:
            console.print(format_error_message("File Error", escape(str(e))))
            raise SystemExit(1)
        except JustlogError as e:
            console.print(format_error_message("Error", escape(str(e))))
            raise SystemExit(1)

    return cast(F, wrapper)
