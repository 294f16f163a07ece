"""
Users service implementation.

Profile reads and edits for the authenticated user. Password changes
go through the auth service because they need the password hasher.
"""

import logging

from .exceptions import AccountNotFoundError
from .interfaces import IUserRepository, IUsersService
from .models import UpdateProfileRequest, UserProfile

logger = logging.getLogger(__name__)


class UsersService(IUsersService):
    """Implements IUsersService over a user repository."""

    def __init__(self, repository: IUserRepository):
        self._users = repository

    async def get_profile(self, user_id: str) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise AccountNotFoundError()
        return user.to_profile()

    async def update_profile(
        self, user_id: str, request: UpdateProfileRequest
    ) -> UserProfile:
        """Apply the fields that were actually sent."""
        fields = request.model_dump(mode="json", exclude_unset=True)
        if not fields:
            return await self.get_profile(user_id)

        user = self._users.update(user_id, fields)
        if user is None:
            raise AccountNotFoundError()
        logger.info("Updated profile for user %s (%s)", user_id, ", ".join(sorted(fields)))
        return user.to_profile()

    async def delete_account(self, user_id: str) -> None:
        if not self._users.delete(user_id):
            raise AccountNotFoundError()
        logger.info("Deleted user %s", user_id)
