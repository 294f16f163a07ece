"""
User module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class AccountNotFoundError(NotFoundError):
    """Raised when an id- or email-scoped operation targets no user."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, code="USER_NOT_FOUND")
