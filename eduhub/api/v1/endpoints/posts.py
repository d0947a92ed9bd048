"""
Post Endpoints

Endpoints:
----------
Posts:
- GET    /posts                      - Feed (newest first, optional post_type)
- POST   /posts                      - Create post
- GET    /posts/{id}                 - Post with comments and counters
- PATCH  /posts/{id}                 - Edit own post
- DELETE /posts/{id}                 - Delete own post

Comments:
- GET    /posts/{id}/comments        - Comments with authors
- POST   /posts/{id}/comments        - Add comment
- DELETE /posts/comments/{id}        - Delete own comment

Likes:
- POST   /posts/{id}/like            - Like (idempotent)
- DELETE /posts/{id}/like            - Unlike
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eduhub.api.deps import get_current_user, get_optional_user, get_store
from eduhub.models import PostType, User
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
from eduhub.services.exceptions import NotFoundError, PermissionDeniedError
from eduhub.services.post_service import PostService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])


# ============================================================
# HELPER
# ============================================================

def get_post_service(store: RepositoryStore = Depends(get_store)) -> PostService:
    """Dependency that provides PostService instance."""
    return PostService(store)


# ============================================================
# POST ENDPOINTS
# ============================================================

@router.get(
    "",
    response_model=List[PostWithUserResponse],
    summary="Get the feed",
    description="""
    All posts, newest first, each with its author and like/comment counts.

    When called with a valid token every post also carries `liked` for the
    current user. Filter with `post_type` for the books/worksheets and
    videos pages.
    """,
)
async def list_posts(
    post_type: Optional[PostType] = Query(None, description="Filter by post type"),
    current_user: Optional[User] = Depends(get_optional_user),
    service: PostService = Depends(get_post_service),
):
    return await service.get_feed(
        viewer_id=current_user.id if current_user else None,
        post_type=post_type.value if post_type else None
    )


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
async def create_post(
    data: PostCreate,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.create_post(current_user.id, data)


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get a post with its comments",
)
async def get_post(
    post_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.get_post_detail(
            post_id,
            viewer_id=current_user.id if current_user else None
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch(
    "/{post_id}",
    response_model=PostResponse,
    summary="Edit a post",
)
async def update_post(
    post_id: int,
    data: PostUpdate,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.update_post(post_id, current_user.id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a post",
)
async def delete_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        await service.delete_post(post_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


# ============================================================
# COMMENT ENDPOINTS
# ============================================================

@router.get(
    "/{post_id}/comments",
    response_model=List[CommentWithUserResponse],
    summary="List comments of a post",
)
async def list_comments(
    post_id: int,
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.list_comments(post_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/{post_id}/comments",
    response_model=CommentWithUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
async def add_comment(
    post_id: int,
    data: CommentCreate,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.add_comment(post_id, current_user.id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/comments/{comment_id}",
    response_model=CommentResponse,
    summary="Delete a comment",
)
async def delete_comment(
    comment_id: int,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.delete_comment(comment_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


# ============================================================
# LIKE ENDPOINTS
# ============================================================

@router.post(
    "/{post_id}/like",
    response_model=LikeStatusResponse,
    summary="Like a post",
    description="Liking a post that is already liked changes nothing.",
)
async def like_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.like_post(post_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete(
    "/{post_id}/like",
    response_model=LikeStatusResponse,
    summary="Remove a like",
)
async def unlike_post(
    post_id: int,
    current_user: User = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    try:
        return await service.unlike_post(post_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
