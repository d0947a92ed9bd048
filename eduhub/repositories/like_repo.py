"""
Like Repository

Data access layer for Like records.
"""

from typing import List, Optional

from eduhub.db.database import Database
from eduhub.models import Like
from eduhub.repositories.base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    """Repository for Like records."""

    def __init__(self, db: Database):
        super().__init__(Like, db.likes, db)

    async def get_post_likes(self, post_id: int) -> List[Like]:
        return await self.filter(lambda like: like.post_id == post_id)

    async def get_like(self, post_id: int, user_id: int) -> Optional[Like]:
        """Get the like a user gave a post, if any."""
        return await self.find_first(
            lambda like: like.post_id == post_id and like.user_id == user_id
        )

    async def create_like(self, post_id: int, user_id: int) -> Like:
        """
        Like a post.

        Idempotent: at most one like exists per (post, user) pair, so a
        repeated call returns the existing record unchanged.
        """
        existing = await self.get_like(post_id, user_id)
        if existing:
            return existing
        return await self.create(post_id=post_id, user_id=user_id)
