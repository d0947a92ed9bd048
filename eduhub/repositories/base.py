"""
Base Repository

Generic base class for all repositories.
Provides common CRUD operations over an in-memory table.
"""

from typing import Any, Callable, Generic, List, Optional, Type, TypeVar

from eduhub.db.database import Database, Table
from eduhub.models import Record

ModelType = TypeVar("ModelType", bound=Record)

# Fields assigned at creation that an update must never overwrite
PROTECTED_FIELDS = frozenset({"id", "created_at"})


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common CRUD operations.

    All repositories should inherit from this class. Absence is reported
    through the return value (None / False), never by raising.
    """
    def __init__(self, model: Type[ModelType], table: Table[ModelType], db: Database):
        """
        Initialize repository.

        Args:
            model: Record class stored in the table
            table: Table holding the records
            db: Database (provides the creation clock)
        """
        self.model = model
        self.table = table
        self.db = db

    # -----------------------------
    # Get Element By id
    # -----------------------------
    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a record by ID."""
        return self.table.get(id)

    # -----------------------------
    # Get all Records
    # -----------------------------
    async def get_all(self) -> List[ModelType]:
        """Get all records in insertion order."""
        return list(self.table.values())

    # -----------------------------
    # Filter Records
    # -----------------------------
    async def filter(self, predicate: Callable[[ModelType], bool]) -> List[ModelType]:
        """Linear scan returning every record matching the predicate."""
        return [record for record in self.table.values() if predicate(record)]

    async def find_first(self, predicate: Callable[[ModelType], bool]) -> Optional[ModelType]:
        """Linear scan returning the first matching record."""
        return next(
            (record for record in self.table.values() if predicate(record)),
            None
        )

    # -----------------------------
    # Create Single Record
    # -----------------------------
    async def create(self, **kwargs) -> ModelType:
        """Create a new record, assigning its id and created_at."""
        for field in PROTECTED_FIELDS:
            kwargs.pop(field, None)
        instance = self.model(
            id=self.table.next_id(),
            created_at=self.db.clock(),
            **kwargs
        )
        return self.table.put(instance)

    # -----------------------------
    # Update record
    # -----------------------------
    async def update(self, id: int, **kwargs: Any) -> Optional[ModelType]:
        """Shallow-merge fields onto a record. No validation is performed."""
        instance = await self.get_by_id(id)
        if not instance:
            return None

        changes = {
            key: value for key, value in kwargs.items()
            if key not in PROTECTED_FIELDS
        }
        updated = instance.model_copy(update=changes)
        return self.table.put(updated)

    # -----------------------------
    # Delete record
    # -----------------------------
    async def delete(self, id: int) -> bool:
        """Delete a record by ID. Returns False if it did not exist."""
        return self.table.remove(id)
