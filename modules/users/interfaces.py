"""
User module interfaces.

The auth module depends on IUserRepository (the user directory), not on
the Supabase implementation, so tests can substitute an in-memory store.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import NewUser, UpdateProfileRequest, User, UserProfile


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence for user records, keyed by id and by unique email."""

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Return the user with this id, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Return the user with this email, or None."""
        ...

    def create(self, new_user: NewUser) -> User:
        """
        Insert a user.

        Raises:
            EmailAlreadyRegisteredError: If the email is already taken
        """
        ...

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        """Update the given columns. Returns None if the user is gone."""
        ...

    def update_password(self, user_id: str, password_digest: str) -> Optional[User]:
        """Replace the stored password digest."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete the user. Returns False if nothing was deleted."""
        ...


@runtime_checkable
class IUsersService(Protocol):
    """Profile operations for the authenticated user."""

    async def get_profile(self, user_id: str) -> UserProfile:
        ...

    async def update_profile(
        self, user_id: str, request: UpdateProfileRequest
    ) -> UserProfile:
        ...

    async def delete_account(self, user_id: str) -> None:
        ...
