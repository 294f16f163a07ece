"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks and keeps the auth gate decoupled from
persistence and email.
"""

from typing import Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    MessageResponse,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    TokenPair,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def sign_up(self, request: SignUpRequest) -> SignUpResponse:
        """
        Create an account.

        Raises:
            ConflictError: If the email is already registered
        """
        ...

    async def sign_in(self, email: str, password: str) -> SignInResponse:
        """
        Check credentials and mint an access/refresh pair.

        Raises:
            AuthenticationError: Unknown email or wrong password (one message for both)
        """
        ...

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new access/refresh pair.

        Raises:
            AuthenticationError: If the refresh token is missing, invalid or expired
        """
        ...

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate an access token and return the current user behind it.

        Args:
            token: JWT access token

        Returns:
            AuthenticatedUser with no password digest

        Raises:
            AuthenticationError: If the token is invalid or expired, or the user is gone
        """
        ...

    async def request_password_recovery(self, email: str) -> MessageResponse:
        """
        Email a time-boxed password reset link.

        Raises:
            NotFoundError: If no user has this email
        """
        ...

    async def recover_password(self, token: str, new_password: str) -> MessageResponse:
        """
        Set a new password using a recovery token.

        Raises:
            ValidationError: If the token is invalid, expired or already used
        """
        ...

    async def change_password(
        self, user_id: str, old_password: str, new_password: str
    ) -> MessageResponse:
        """
        Change the password of an authenticated user.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the old password is wrong
        """
        ...
