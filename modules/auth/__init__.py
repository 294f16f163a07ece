"""
Authentication module.

Handles password hashing, JWT signing/validation, signup/signin, token
refresh and password recovery.

Public API:
- IAuthService: Interface for auth operations
- TokenKind, TokenClaims, TokenPair: Token models
- PasswordHasher, TokenCodec: Primitives
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService
from .models import TokenKind, TokenClaims, TokenPair
from .passwords import PasswordHasher
from .tokens import TokenCodec
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    UserNotFoundError,
    InvalidRecoveryTokenError,
    IncorrectPasswordError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "TokenKind",
    "TokenClaims",
    "TokenPair",
    # Primitives
    "PasswordHasher",
    "TokenCodec",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "UserNotFoundError",
    "InvalidRecoveryTokenError",
    "IncorrectPasswordError",
]
