"""
Resource Service
Business logic for the resource library (books, worksheets, videos).
"""

import asyncio
from typing import List, Optional

from eduhub.models import Resource
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.auth import UserResponse
from eduhub.schemas.resource import (
    ResourceCreate,
    ResourceResponse,
    ResourceWithUserResponse,
)
from eduhub.services.exceptions import NotFoundError, PermissionDeniedError


class ResourceNotFoundError(NotFoundError):
    """Resource does not exist."""
    pass


class ResourceService:
    """Service class for resource operations."""

    def __init__(self, store: RepositoryStore):
        """Initialize with the repository store."""
        self.store = store

    # ============================================================
    # List Resources
    # ============================================================
    async def list_resources(
        self,
        resource_type: Optional[str] = None
    ) -> List[ResourceWithUserResponse]:
        """
        Get library resources, each with the user who shared it.

        Args:
            resource_type: Only return resources of this type

        Returns:
            Resources in the order they were shared
        """
        if resource_type:
            resources = await self.store.get_resources_by_type(resource_type)
        else:
            resources = await self.store.get_resources()

        owners = await asyncio.gather(
            *(self.store.get_user(resource.user_id) for resource in resources)
        )
        return [
            self._with_owner(resource, owner)
            for resource, owner in zip(resources, owners)
        ]

    # ============================================================
    # Create Resource
    # ============================================================
    async def create_resource(
        self,
        user_id: int,
        data: ResourceCreate
    ) -> ResourceWithUserResponse:
        resource = await self.store.create_resource({
            **data.model_dump(),
            "user_id": user_id,
        })
        owner = await self.store.get_user(user_id)
        return self._with_owner(resource, owner)

    # ============================================================
    # Delete Resource
    # ============================================================
    async def delete_resource(self, resource_id: int, user_id: int) -> ResourceResponse:
        """
        Delete a resource shared by the user.

        Raises:
            ResourceNotFoundError: If resource does not exist
            PermissionDeniedError: If the user did not share it
        """
        resource = await self.store.get_resource(resource_id)

        if not resource:
            raise ResourceNotFoundError("Resource not found")

        if resource.user_id != user_id:
            raise PermissionDeniedError("You can only delete your own resources")

        await self.store.delete_resource(resource_id)
        return ResourceResponse.model_validate(resource)

    @staticmethod
    def _with_owner(resource: Resource, owner) -> ResourceWithUserResponse:
        return ResourceWithUserResponse(
            **resource.model_dump(),
            user=UserResponse.model_validate(owner) if owner else None,
        )
