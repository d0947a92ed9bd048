from .base import Record


class Comment(Record):
    post_id: int
    user_id: int
    content: str
