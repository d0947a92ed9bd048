from typing import Optional

from pydantic import BaseModel, ConfigDict

from .base import Record
from .user import User


class Message(Record):
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool = False


class ConversationSummary(BaseModel):
    """One entry of a user's inbox: a partner and the state of the thread."""

    model_config = ConfigDict(from_attributes=True)

    partner_id: int
    # None when the partner account no longer exists
    partner: Optional[User] = None
    unread_count: int = 0
    last_message: Optional[Message] = None
