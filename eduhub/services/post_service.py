"""
Post Service

Business logic for the feed: posts, comments and likes.
"""

import asyncio
import logging
from typing import List, Optional

from eduhub.models import Post, PostWithUser
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.post import (
    CommentCreate,
    CommentResponse,
    CommentWithUserResponse,
    LikeStatusResponse,
    PostCreate,
    PostDetailResponse,
    PostResponse,
    PostUpdate,
    PostWithUserResponse,
)
from eduhub.schemas.auth import UserResponse
from eduhub.services.exceptions import NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


class PostNotFoundError(NotFoundError):
    """Post does not exist."""
    pass


class CommentNotFoundError(NotFoundError):
    """Comment does not exist."""
    pass


class PostService:
    """
    Service for post operations.

    Handles:
    - Feed assembly with per-viewer like status
    - Post CRUD
    - Comments
    - Likes
    """

    def __init__(self, store: RepositoryStore):
        self.store = store

    # ============================================================
    # FEED
    # ============================================================

    async def get_feed(
        self,
        viewer_id: Optional[int] = None,
        post_type: Optional[str] = None
    ) -> List[PostWithUserResponse]:
        """
        Get all posts, newest first.

        Args:
            viewer_id: Current user, if any. Adds the `liked` flag.
            post_type: Only return posts of this type
        """
        posts = await self.store.get_posts(post_type)
        return await self._build_feed(posts, viewer_id)

    async def get_user_posts(
        self,
        user_id: int,
        viewer_id: Optional[int] = None
    ) -> List[PostWithUserResponse]:
        """Get one user's posts, newest first."""
        posts = await self.store.get_user_posts(user_id)
        return await self._build_feed(posts, viewer_id)

    async def _build_feed(
        self,
        posts: List[PostWithUser],
        viewer_id: Optional[int]
    ) -> List[PostWithUserResponse]:
        if viewer_id is not None:
            statuses = await self.store.get_like_statuses(
                [post.id for post in posts],
                viewer_id
            )
            posts = [
                post.model_copy(update={"liked": liked})
                for post, liked in zip(posts, statuses)
            ]
        return [PostWithUserResponse.model_validate(post) for post in posts]

    # ============================================================
    # POSTS
    # ============================================================

    async def get_post_detail(
        self,
        post_id: int,
        viewer_id: Optional[int] = None
    ) -> PostDetailResponse:
        """Get a post with its author, comments and counters."""
        post = await self._get_post_or_raise(post_id)

        user, comments, likes = await asyncio.gather(
            self.store.get_user(post.user_id),
            self.list_comments(post_id),
            self.store.get_post_likes(post_id),
        )

        liked = False
        if viewer_id is not None:
            liked = await self.store.get_like(post_id, viewer_id) is not None

        return PostDetailResponse(
            **post.model_dump(),
            user=UserResponse.model_validate(user) if user else None,
            comments=comments,
            likes_count=len(likes),
            comments_count=len(comments),
            shares_count=0,
            liked=liked,
        )

    async def create_post(self, user_id: int, data: PostCreate) -> PostResponse:
        """Create a post owned by the user."""
        post = await self.store.create_post({
            **data.model_dump(),
            "user_id": user_id,
        })
        logger.info(f"Post created: id={post.id}, user={user_id}, type={post.post_type}")
        return PostResponse.model_validate(post)

    async def update_post(
        self,
        post_id: int,
        user_id: int,
        data: PostUpdate
    ) -> PostResponse:
        """
        Edit a post.

        Raises:
            PostNotFoundError: If the post does not exist
            PermissionDeniedError: If the user does not own the post
        """
        await self._get_owned_post(post_id, user_id)

        update_data = data.model_dump(exclude_unset=True)
        post = await self.store.update_post(post_id, update_data)
        if not post:
            raise PostNotFoundError("Post not found")

        return PostResponse.model_validate(post)

    async def delete_post(self, post_id: int, user_id: int) -> bool:
        """Delete a post. Its comments and likes are left in place."""
        await self._get_owned_post(post_id, user_id)
        return await self.store.delete_post(post_id)

    async def _get_post_or_raise(self, post_id: int) -> Post:
        post = await self.store.get_post(post_id)
        if not post:
            raise PostNotFoundError("Post not found")
        return post

    async def _get_owned_post(self, post_id: int, user_id: int) -> Post:
        post = await self._get_post_or_raise(post_id)
        if post.user_id != user_id:
            raise PermissionDeniedError("You can only modify your own posts")
        return post

    # ============================================================
    # COMMENTS
    # ============================================================

    async def list_comments(self, post_id: int) -> List[CommentWithUserResponse]:
        """Get a post's comments, each with its author."""
        await self._get_post_or_raise(post_id)
        comments = await self.store.get_post_comments(post_id)
        authors = await asyncio.gather(
            *(self.store.get_user(comment.user_id) for comment in comments)
        )
        return [
            CommentWithUserResponse(
                **comment.model_dump(),
                user=UserResponse.model_validate(author) if author else None,
            )
            for comment, author in zip(comments, authors)
        ]

    async def add_comment(
        self,
        post_id: int,
        user_id: int,
        data: CommentCreate
    ) -> CommentWithUserResponse:
        await self._get_post_or_raise(post_id)

        comment = await self.store.create_comment({
            "post_id": post_id,
            "user_id": user_id,
            "content": data.content,
        })
        author = await self.store.get_user(user_id)

        return CommentWithUserResponse(
            **comment.model_dump(),
            user=UserResponse.model_validate(author) if author else None,
        )

    async def delete_comment(self, comment_id: int, user_id: int) -> CommentResponse:
        comment = await self.store.get_comment(comment_id)
        if not comment:
            raise CommentNotFoundError("Comment not found")
        if comment.user_id != user_id:
            raise PermissionDeniedError("You can only delete your own comments")

        await self.store.delete_comment(comment_id)
        return CommentResponse.model_validate(comment)

    # ============================================================
    # LIKES
    # ============================================================

    async def like_post(self, post_id: int, user_id: int) -> LikeStatusResponse:
        """Like a post. Liking twice has no further effect."""
        await self._get_post_or_raise(post_id)
        await self.store.create_like({"post_id": post_id, "user_id": user_id})
        return await self._like_status(post_id, user_id)

    async def unlike_post(self, post_id: int, user_id: int) -> LikeStatusResponse:
        """Remove the user's like, if any."""
        await self._get_post_or_raise(post_id)
        like = await self.store.get_like(post_id, user_id)
        if like:
            await self.store.delete_like(like.id)
        return await self._like_status(post_id, user_id)

    async def _like_status(self, post_id: int, user_id: int) -> LikeStatusResponse:
        likes, like = await asyncio.gather(
            self.store.get_post_likes(post_id),
            self.store.get_like(post_id, user_id),
        )
        return LikeStatusResponse(liked=like is not None, likes_count=len(likes))
