"""
Exit codes for joinboard.

Semantic exit codes so scripts can tell failure kinds apart.
"""

from joinboard.exceptions import (
    NotFoundLocalError,
    RemoteReadError,
    RemoteWriteError,
    TaskValidationError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Network or remote store error (unreachable, timeout, rejected write)
ERROR_NETWORK = 4

# Resource not found in the local cache
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(error: BaseException) -> int:
    """Map a board error to its exit code."""
    if isinstance(error, (RemoteReadError, RemoteWriteError)):
        return ERROR_NETWORK
    if isinstance(error, NotFoundLocalError):
        return ERROR_NOT_FOUND
    if isinstance(error, TaskValidationError):
        return ERROR_INVALID_ARGS
    return ERROR_GENERAL
