"""
Resource Repository

Data access layer for the shared resource library.
"""

from typing import List

from eduhub.db.database import Database
from eduhub.models import Resource
from eduhub.repositories.base import BaseRepository


class ResourceRepository(BaseRepository[Resource]):
    """Repository for Resource records."""

    def __init__(self, db: Database):
        super().__init__(Resource, db.resources, db)

    async def get_by_type(self, resource_type: str) -> List[Resource]:
        return await self.filter(lambda resource: resource.type == resource_type)
