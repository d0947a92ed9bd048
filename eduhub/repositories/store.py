"""
Repository Store

Single entry point to every entity collection. Wraps the per-entity
repositories and adds the cross-entity reads: feed assembly with owner and
engagement counters, like status, and conversation grouping.

Not-found is never an exception here. Reads return None, updates return
None and deletes return False; translating that into an HTTP status is the
caller's job.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from eduhub.db.database import Database
from eduhub.models import (
    Comment,
    ConversationSummary,
    Like,
    Message,
    Post,
    PostWithUser,
    Resource,
    User,
)
from eduhub.repositories.comment_repo import CommentRepository
from eduhub.repositories.like_repo import LikeRepository
from eduhub.repositories.message_repo import MessageRepository
from eduhub.repositories.post_repo import PostRepository
from eduhub.repositories.resource_repo import ResourceRepository
from eduhub.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class RepositoryStore:
    """Facade over all repositories sharing one in-memory database."""

    def __init__(self, db: Database):
        self.db = db
        self.user_repo = UserRepository(db)
        self.post_repo = PostRepository(db)
        self.comment_repo = CommentRepository(db)
        self.like_repo = LikeRepository(db)
        self.message_repo = MessageRepository(db)
        self.resource_repo = ResourceRepository(db)

    # ============================================================
    # USERS
    # ============================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.user_repo.get_by_email(email)

    async def create_user(self, data: Dict[str, Any]) -> User:
        """Insert a user. Email uniqueness is checked by the caller."""
        return await self.user_repo.create_user(**data)

    async def update_user(self, user_id: int, data: Dict[str, Any]) -> Optional[User]:
        return await self.user_repo.update_user(user_id, **data)

    # ============================================================
    # POSTS
    # ============================================================

    async def get_post(self, post_id: int) -> Optional[Post]:
        return await self.post_repo.get_by_id(post_id)

    async def get_posts(self, post_type: Optional[str] = None) -> List[PostWithUser]:
        """
        Get the feed.

        Every post is joined with its owner and like/comment counts.
        Ordered newest first; posts created at the same instant are ordered
        by id, highest first.
        """
        posts = await self.post_repo.get_posts(post_type)
        return await self._attach_post_details(posts)

    async def get_user_posts(self, user_id: int) -> List[PostWithUser]:
        """Same contract as get_posts, restricted to one owner."""
        posts = await self.post_repo.get_user_posts(user_id)
        return await self._attach_post_details(posts)

    async def create_post(self, data: Dict[str, Any]) -> Post:
        return await self.post_repo.create(**data)

    async def update_post(self, post_id: int, data: Dict[str, Any]) -> Optional[Post]:
        return await self.post_repo.update(post_id, **data)

    async def delete_post(self, post_id: int) -> bool:
        return await self.post_repo.delete(post_id)

    async def _attach_post_details(self, posts: List[Post]) -> List[PostWithUser]:
        # Same-instant posts fall back to id order
        detailed = await asyncio.gather(
            *(self._with_details(post) for post in posts)
        )
        return sorted(detailed, key=lambda post: (post.created_at, post.id), reverse=True)

    async def _with_details(self, post: Post) -> PostWithUser:
        user, likes, comments = await asyncio.gather(
            self.get_user(post.user_id),
            self.get_post_likes(post.id),
            self.get_post_comments(post.id),
        )
        return PostWithUser(
            **post.model_dump(),
            user=user,
            likes_count=len(likes),
            comments_count=len(comments),
            shares_count=0,
        )

    # ============================================================
    # COMMENTS
    # ============================================================

    async def get_comment(self, comment_id: int) -> Optional[Comment]:
        return await self.comment_repo.get_by_id(comment_id)

    async def get_post_comments(self, post_id: int) -> List[Comment]:
        return await self.comment_repo.get_post_comments(post_id)

    async def create_comment(self, data: Dict[str, Any]) -> Comment:
        return await self.comment_repo.create(**data)

    async def delete_comment(self, comment_id: int) -> bool:
        return await self.comment_repo.delete(comment_id)

    # ============================================================
    # LIKES
    # ============================================================

    async def get_post_likes(self, post_id: int) -> List[Like]:
        return await self.like_repo.get_post_likes(post_id)

    async def get_like(self, post_id: int, user_id: int) -> Optional[Like]:
        return await self.like_repo.get_like(post_id, user_id)

    async def create_like(self, data: Dict[str, Any]) -> Like:
        """Idempotent: returns the existing like for the same (post, user)."""
        return await self.like_repo.create_like(data["post_id"], data["user_id"])

    async def delete_like(self, like_id: int) -> bool:
        return await self.like_repo.delete(like_id)

    async def get_like_statuses(self, post_ids: List[int], user_id: int) -> List[bool]:
        """Whether the user liked each post, in the order of post_ids."""
        likes = await asyncio.gather(
            *(self.get_like(post_id, user_id) for post_id in post_ids)
        )
        return [like is not None for like in likes]

    # ============================================================
    # MESSAGES
    # ============================================================

    async def get_user_messages(self, user_id: int) -> List[Message]:
        return await self.message_repo.get_user_messages(user_id)

    async def get_conversation(self, user_a_id: int, user_b_id: int) -> List[Message]:
        """Messages between two users, oldest first."""
        return await self.message_repo.get_conversation(user_a_id, user_b_id)

    async def create_message(self, data: Dict[str, Any]) -> Message:
        """Store a message. is_read is always False on creation."""
        return await self.message_repo.create_message(
            sender_id=data["sender_id"],
            receiver_id=data["receiver_id"],
            content=data["content"],
        )

    async def mark_message_as_read(self, message_id: int) -> Optional[Message]:
        return await self.message_repo.mark_as_read(message_id)

    async def count_unread_messages(self, user_id: int) -> int:
        return await self.message_repo.count_unread(user_id)

    async def get_conversations(self, user_id: int) -> List[ConversationSummary]:
        """
        Group a user's messages by conversation partner.

        Partners appear in the order they first show up in the user's
        messages. Each summary carries the partner profile, the number of
        messages the user received from them that are still unread, and the
        most recent message of the thread.
        """
        messages = await self.get_user_messages(user_id)

        partner_ids: List[int] = []
        for message in messages:
            for participant in (message.sender_id, message.receiver_id):
                if participant != user_id and participant not in partner_ids:
                    partner_ids.append(participant)

        return list(await asyncio.gather(
            *(self._summarize(user_id, partner_id) for partner_id in partner_ids)
        ))

    async def _summarize(self, user_id: int, partner_id: int) -> ConversationSummary:
        partner, conversation = await asyncio.gather(
            self.get_user(partner_id),
            self.get_conversation(user_id, partner_id),
        )
        unread_count = sum(
            1 for message in conversation
            if message.receiver_id == user_id and not message.is_read
        )
        return ConversationSummary(
            partner_id=partner_id,
            partner=partner,
            unread_count=unread_count,
            last_message=conversation[-1] if conversation else None,
        )

    # ============================================================
    # RESOURCES
    # ============================================================

    async def get_resource(self, resource_id: int) -> Optional[Resource]:
        return await self.resource_repo.get_by_id(resource_id)

    async def get_resources(self) -> List[Resource]:
        return await self.resource_repo.get_all()

    async def get_resources_by_type(self, resource_type: str) -> List[Resource]:
        return await self.resource_repo.get_by_type(resource_type)

    async def create_resource(self, data: Dict[str, Any]) -> Resource:
        return await self.resource_repo.create(**data)

    async def delete_resource(self, resource_id: int) -> bool:
        return await self.resource_repo.delete(resource_id)
