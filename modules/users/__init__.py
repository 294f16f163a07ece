"""
Users module.

Owns the user directory (Supabase `users` table) and profile operations.

Public API:
- IUserRepository: Interface for user persistence
- IUsersService: Interface for profile operations
- User, UserProfile, NewUser, UpdateProfileRequest
- User exceptions: EmailAlreadyRegisteredError, AccountNotFoundError
"""

from .interfaces import IUserRepository, IUsersService
from .models import User, UserProfile, NewUser, UpdateProfileRequest
from .exceptions import EmailAlreadyRegisteredError, AccountNotFoundError

__all__ = [
    # Interfaces
    "IUserRepository",
    "IUsersService",
    # Models
    "User",
    "UserProfile",
    "NewUser",
    "UpdateProfileRequest",
    # Exceptions
    "EmailAlreadyRegisteredError",
    "AccountNotFoundError",
]
