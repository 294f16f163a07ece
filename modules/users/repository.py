"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the `users` table.
The table carries a unique constraint on `email` (see migrations/), which
is the real guard against two concurrent signups for the same address.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .exceptions import EmailAlreadyRegisteredError
from .models import NewUser, User

logger = logging.getLogger(__name__)

USERS_TABLE = "users"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return Pydantic models with proper mapping from database rows.

    Note: This repository does NOT hash passwords or check credentials.
    The auth service is responsible for both.
    """

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by ID.

        Args:
            user_id: The user UUID.

        Returns:
            User, or None if not found.
        """
        with self._guard():
            result = (
                self._db.table(USERS_TABLE).select("*").eq("id", user_id).execute()
            )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address (stored lowercase)."""
        with self._guard():
            result = (
                self._db.table(USERS_TABLE)
                .select("*")
                .eq("email", email.lower())
                .execute()
            )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, new_user: NewUser) -> User:
        """
        Insert a new user row.

        Args:
            new_user: Fields for the new row, password already hashed.

        Returns:
            Created User with database timestamps.

        Raises:
            EmailAlreadyRegisteredError: If the unique email constraint fires.
        """
        row = new_user.to_row()
        row["email"] = row["email"].lower()
        try:
            with self._guard():
                result = self._db.table(USERS_TABLE).insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                logger.info("Unique email constraint rejected insert for %s", row["email"])
                raise EmailAlreadyRegisteredError(row["email"]) from e
            raise
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        """
        Update columns on a user row.

        Args:
            user_id: The user UUID.
            fields: Column values to set. ``updated_at`` is filled in here.

        Returns:
            The updated User, or None if no row matched.
        """
        data = dict(fields)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        with self._guard():
            result = (
                self._db.table(USERS_TABLE).update(data).eq("id", user_id).execute()
            )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def update_password(self, user_id: str, password_digest: str) -> Optional[User]:
        """Replace the stored password digest."""
        return self.update(user_id, {"password": password_digest})

    def delete(self, user_id: str) -> bool:
        """
        Delete a user row.

        Returns:
            True if a row was deleted.
        """
        with self._guard():
            result = self._db.table(USERS_TABLE).delete().eq("id", user_id).execute()
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            name=data["name"],
            last_name=data["last_name"],
            email=data["email"],
            password=data["password"],
            avatar=data.get("avatar"),
            birthday=data.get("birthday"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
