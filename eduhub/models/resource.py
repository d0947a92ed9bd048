import enum
from typing import Optional

from .base import Record


class ResourceType(str, enum.Enum):
    BOOK = "book"
    WORKSHEET = "worksheet"
    VIDEO = "video"


class Resource(Record):
    user_id: int
    title: str
    description: Optional[str] = None
    type: ResourceType
    url: str
