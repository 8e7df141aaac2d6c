"""Domain exception hierarchy for structured error responses."""

from __future__ import annotations


class AppException(Exception):
    """Base exception for all domain errors.

    Subclasses set ``code`` and ``status_code`` at the class level; callers
    provide ``message`` and an optional ``details`` list.
    """

    code: str = "APP_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []


class NotFoundException(AppException):
    code = "NOT_FOUND"
    status_code = 404


class UnauthorizedException(AppException):
    code = "UNAUTHORIZED"
    status_code = 401


class PersistenceError(AppException):
    """A single insert/update/delete statement failed at the store.

    ``operation`` names the mutation ("create", "update", "delete") and
    ``detail`` carries the driver's error text, kept apart from ``message``
    so the caller decides whether to show it.
    """

    code = "DATABASE_ERROR"
    status_code = 500

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"Database error during invoice {operation}")
        self.operation = operation
        self.detail = detail
