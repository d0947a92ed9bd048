"""
Comment Repository

Data access layer for Comment records.
"""

from typing import List

from eduhub.db.database import Database
from eduhub.models import Comment
from eduhub.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment records."""

    def __init__(self, db: Database):
        super().__init__(Comment, db.comments, db)

    async def get_post_comments(self, post_id: int) -> List[Comment]:
        """Get comments of a post in insertion order."""
        return await self.filter(lambda comment: comment.post_id == post_id)
