"""
Post Repository

Data access layer for Post records.
"""

from typing import List, Optional

from eduhub.db.database import Database
from eduhub.models import Post
from eduhub.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post records."""

    def __init__(self, db: Database):
        super().__init__(Post, db.posts, db)

    async def get_posts(self, post_type: Optional[str] = None) -> List[Post]:
        """Get all posts, optionally restricted to one post type."""
        if post_type is None:
            return await self.get_all()
        return await self.filter(lambda post: post.post_type == post_type)

    async def get_user_posts(self, user_id: int) -> List[Post]:
        """Get every post owned by a user."""
        return await self.filter(lambda post: post.user_id == user_id)
