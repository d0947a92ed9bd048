import enum
from typing import Optional

from .base import Record
from .user import User


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class PostType(str, enum.Enum):
    REGULAR = "regular"
    BOOK_WORKSHEET = "book_worksheet"
    VIDEO = "video"


class Post(Record):
    user_id: int
    content: str
    media_url: Optional[str] = None
    media_type: Optional[MediaType] = None
    post_type: PostType = PostType.REGULAR


class PostWithUser(Post):
    """A post joined with its owner and its engagement counters."""

    # None when the owner has been removed (no cascading delete)
    user: Optional[User] = None
    likes_count: int = 0
    comments_count: int = 0
    shares_count: int = 0  # Shares are not tracked
    liked: Optional[bool] = None
