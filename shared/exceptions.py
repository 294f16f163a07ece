"""
Base exception classes for the Todo List backend.

Each module should define its own exceptions that inherit from these bases.
Every base maps to exactly one HTTP status in api/errors.py.
"""

from typing import Optional, Any


class TodoListError(Exception):
    """
    Base exception for all Todo List errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(TodoListError):
    """Resource not found."""

    pass


class ValidationError(TodoListError):
    """Input validation failed (bad request)."""

    pass


class ConflictError(TodoListError):
    """Resource already exists."""

    pass


class AuthenticationError(TodoListError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(TodoListError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(TodoListError):
    """Server is misconfigured and cannot serve the request."""

    pass


class ExternalServiceError(TodoListError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
