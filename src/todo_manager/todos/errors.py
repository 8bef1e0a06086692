"""Errors raised by the todo store and query engine.

Both kinds are recoverable: the operation layer reports them to the
caller as structured failures and never lets them terminate the process.
"""

from typing import Any


class TodoError(Exception):
    """Base class for recoverable todo errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (matches tools.registry.ErrorCode)
        details: Additional error details
    """

    error_code = "TODO_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TodoError):
    """A field value is empty or invalid. State is never mutated."""

    error_code = "VALIDATION_FAILED"


class NotFoundError(TodoError):
    """The operation referenced an id that does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, todo_id: str):
        super().__init__(f'Todo with ID "{todo_id}" not found.', {"id": todo_id})
        self.todo_id = todo_id
