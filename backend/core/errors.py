"""core/errors.py — Application error taxonomy.

Route handlers and the storage layer raise these instead of HTTPException so
each failure kind keeps its own status code all the way to the exception
handler in api/main.py:

    NotFoundError      404  requested id does not exist
    ValidationFailure  422  bad enum value, unknown filter/sort field, dangling reference
    ConflictError      409  unique constraint violated (email, one result per fixture)
    StorageFailure     500  database or image storage call failed; cause is logged, not exposed
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that map to a structured JSON error response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, details: Any = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ValidationFailure(AppError):
    status_code = 422
    default_message = "Validation failed"


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource already exists"


class StorageFailure(AppError):
    status_code = 500
    default_message = "A storage error occurred"
