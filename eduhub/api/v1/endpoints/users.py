from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from eduhub.api.deps import get_current_user, get_optional_user, get_store
from eduhub.models import User
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.auth import UserResponse, UserUpdate
from eduhub.schemas.post import PostWithUserResponse
from eduhub.services.exceptions import NotFoundError
from eduhub.services.post_service import PostService
from eduhub.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(store: RepositoryStore = Depends(get_store)) -> UserService:
    return UserService(store)


@router.patch(
    "/me",
    response_model=UserResponse,
    summary="Update your profile",
)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    try:
        return await service.update_profile(current_user.id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user's profile",
)
async def get_user(
    user_id: int,
    service: UserService = Depends(get_user_service),
):
    try:
        return await service.get_profile(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get(
    "/{user_id}/posts",
    response_model=List[PostWithUserResponse],
    summary="Get a user's posts",
)
async def get_user_posts(
    user_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    store: RepositoryStore = Depends(get_store),
):
    try:
        await UserService(store).get_profile(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return await PostService(store).get_user_posts(
        user_id,
        viewer_id=current_user.id if current_user else None
    )
