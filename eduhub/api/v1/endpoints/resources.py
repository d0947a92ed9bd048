from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from eduhub.api.deps import get_current_user, get_store
from eduhub.models import ResourceType, User
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.resource import (
    ResourceCreate,
    ResourceResponse,
    ResourceWithUserResponse,
)
from eduhub.services.exceptions import NotFoundError, PermissionDeniedError
from eduhub.services.resource_service import ResourceService

router = APIRouter(prefix="/resources", tags=["Resources"])


def get_resource_service(store: RepositoryStore = Depends(get_store)) -> ResourceService:
    return ResourceService(store)


@router.get(
    "",
    response_model=List[ResourceWithUserResponse],
    summary="Browse the resource library",
)
async def list_resources(
    type: Optional[ResourceType] = Query(None, description="Filter by resource type"),
    service: ResourceService = Depends(get_resource_service),
):
    return await service.list_resources(type.value if type else None)


@router.post(
    "",
    response_model=ResourceWithUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share a resource",
)
async def create_resource(
    data: ResourceCreate,
    current_user: User = Depends(get_current_user),
    service: ResourceService = Depends(get_resource_service),
):
    return await service.create_resource(current_user.id, data)


@router.delete(
    "/{resource_id}",
    response_model=ResourceResponse,
    summary="Remove a shared resource",
)
async def delete_resource(
    resource_id: int,
    current_user: User = Depends(get_current_user),
    service: ResourceService = Depends(get_resource_service),
):
    try:
        return await service.delete_resource(resource_id, current_user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
