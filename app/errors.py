"""
Error taxonomy for task operations.

Each error carries a short human-readable message and the HTTP status
code the API reports it with, so route handlers can translate any of
them into a JSON response in one place.
"""


class TaskError(Exception):
    """Base class for failures raised by task operations."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class TaskValidationError(TaskError):
    """A title was missing, malformed, or disallowed."""

    status_code = 400
    default_message = "Invalid title"


class InvalidTaskIdError(TaskError):
    """A task id did not look like a non-negative integer."""

    status_code = 400
    default_message = "Invalid task ID"


class TaskNotFoundError(TaskError):
    """A well-formed id matched no stored task."""

    status_code = 404
    default_message = "Task not found"


class StorageError(TaskError):
    """The underlying database failed."""

    status_code = 500
    default_message = "Database error"
