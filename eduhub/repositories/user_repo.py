"""
User Repository

Data access layer for User records.
"""

from typing import Any, Optional

from eduhub.db.database import Database
from eduhub.models import User
from eduhub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User records."""

    def __init__(self, db: Database):
        super().__init__(User, db.users, db)

    # =================
    # Get by email
    # =================
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by email address (case-insensitive).

        Uniqueness is checked by callers before insert, so the first match
        is the only one.
        """
        needle = email.lower()
        return await self.find_first(lambda user: user.email.lower() == needle)

    # =================
    # Create user
    # =================
    async def create_user(self, **fields: Any) -> User:
        """Create a new user. The profile picture always starts empty."""
        fields["profile_picture"] = None
        return await self.create(**fields)

    # =================
    # Update user
    # =================
    async def update_user(self, user_id: int, **kwargs) -> Optional[User]:
        """Update user fields."""
        return await self.update(user_id, **kwargs)
