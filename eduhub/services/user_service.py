"""
User Service
Profile reads and updates.
"""

import logging

from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.auth import UserResponse, UserUpdate
from eduhub.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class UserNotFoundError(NotFoundError):
    """User does not exist."""
    pass


class UserService:
    """Service class for user profiles."""

    def __init__(self, store: RepositoryStore):
        self.store = store

    async def get_profile(self, user_id: int) -> UserResponse:
        user = await self.store.get_user(user_id)
        if not user:
            raise UserNotFoundError("User not found")
        return UserResponse.model_validate(user)

    async def update_profile(self, user_id: int, data: UserUpdate) -> UserResponse:
        """
        Update the user's own profile.

        Only fields present in the request change; email and role are not
        part of UserUpdate and so can never be changed here.
        """
        update_data = data.model_dump(exclude_unset=True)
        user = await self.store.update_user(user_id, update_data)
        if not user:
            raise UserNotFoundError("User not found")

        if update_data:
            logger.info(f"Profile updated: user={user_id}, fields={sorted(update_data)}")
        return UserResponse.model_validate(user)
