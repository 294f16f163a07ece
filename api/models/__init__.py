"""API response models."""

from .errors import ErrorResponse, ValidationErrorResponse

__all__ = [
    "ErrorResponse",
    "ValidationErrorResponse",
]
