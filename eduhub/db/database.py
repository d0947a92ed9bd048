"""
In-Memory Database Module

Process-local storage for every entity type. Nothing here survives a
restart: each table is a dict keyed by an auto-incrementing integer id.

One `Database` is created in the application lifespan and handed to
request handlers through the `get_db` dependency.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Generic, Iterator, Optional, TypeVar

from fastapi import Request

from eduhub.models import Comment, Like, Message, Post, Record, Resource, User

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=Record)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Table(Generic[RecordType]):
    """
    A single entity collection.

    Ids start at 1 and are never reused, even after the record holding the
    highest id has been deleted.
    """

    def __init__(self, name: str):
        self.name = name
        self._rows: Dict[int, RecordType] = {}
        self._next_id = 1

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def get(self, id: int) -> Optional[RecordType]:
        return self._rows.get(id)

    def put(self, record: RecordType) -> RecordType:
        self._rows[record.id] = record
        return record

    def remove(self, id: int) -> bool:
        return self._rows.pop(id, None) is not None

    def values(self) -> Iterator[RecordType]:
        # Snapshot so callers may write while iterating
        return iter(list(self._rows.values()))

    def __len__(self) -> int:
        return len(self._rows)


class Database:
    """Holds one table per entity type plus the clock used for created_at."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or utc_now
        self.users: Table[User] = Table("users")
        self.posts: Table[Post] = Table("posts")
        self.comments: Table[Comment] = Table("comments")
        self.likes: Table[Like] = Table("likes")
        self.messages: Table[Message] = Table("messages")
        self.resources: Table[Resource] = Table("resources")
        logger.info("In-memory database initialized")


def get_db(request: Request) -> Database:
    """
    Dependency injection function for getting the database.

    Usage in FastAPI endpoints:
        @router.get("/")
        async def my_endpoint(db: Database = Depends(get_db)):
            ...
    """
    return request.app.state.db
