from eduhub.models.base import Record
from eduhub.models.user import User, UserRole
from eduhub.models.post import Post, PostWithUser, PostType, MediaType
from eduhub.models.comment import Comment
from eduhub.models.like import Like
from eduhub.models.message import Message, ConversationSummary
from eduhub.models.resource import Resource, ResourceType

__all__ = [
    "Record",
    "User",
    "UserRole",
    "Post",
    "PostWithUser",
    "PostType",
    "MediaType",
    "Comment",
    "Like",
    "Message",
    "ConversationSummary",
    "Resource",
    "ResourceType",
]
