"""Exceptions raised by the board engine."""


class BoardError(Exception):
    """Base exception for all board errors."""


class RemoteReadError(BoardError):
    """Raised when a live query or one-shot read against the remote store fails."""


class RemoteWriteError(BoardError):
    """Raised when creating, updating or deleting a remote document fails."""


class NotFoundLocalError(BoardError):
    """Raised when an operation references a task, subtask or contact absent from the cache."""


class TaskValidationError(BoardError):
    """Raised when a task is not in a state the operation can act on (e.g. no id)."""
