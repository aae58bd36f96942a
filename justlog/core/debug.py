# justlog/core/debug.py
# Debug logging utilities - delegates to unified OutputManager

from .output import get_output_manager


# * Check if debug mode is enabled (based on output level)
def is_debug_enabled() -> bool:
    return get_output_manager().is_debug_enabled()


# * Print error details in debug mode
def debug_error(error: Exception, context: str = "") -> None:
    error_msg = f"Exception: {type(error).__name__}: {str(error)}"
    if context:
        error_msg = f"{context} - {error_msg}"
    get_output_manager().debug(error_msg, "ERROR")
