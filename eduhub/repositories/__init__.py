from eduhub.repositories.base import BaseRepository
from eduhub.repositories.user_repo import UserRepository
from eduhub.repositories.post_repo import PostRepository
from eduhub.repositories.comment_repo import CommentRepository
from eduhub.repositories.like_repo import LikeRepository
from eduhub.repositories.message_repo import MessageRepository
from eduhub.repositories.resource_repo import ResourceRepository
from eduhub.repositories.store import RepositoryStore

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PostRepository",
    "CommentRepository",
    "LikeRepository",
    "MessageRepository",
    "ResourceRepository",
    "RepositoryStore",
]
