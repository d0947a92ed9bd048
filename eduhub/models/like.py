from .base import Record


class Like(Record):
    post_id: int
    user_id: int
