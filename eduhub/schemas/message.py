"""
Direct Message Schemas

Pydantic models for user-to-user messaging.

A conversation is every message exchanged between exactly two users, read
oldest first. The inbox lists one summary per conversation partner.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from eduhub.schemas.auth import UserResponse


class DirectMessageCreate(BaseModel):
    """
    Schema for sending a message.

    The receiver comes from the URL, the sender from the session.
    """
    content: str = Field(
        ...,
        min_length=1,
        max_length=10000,
        description="Message content"
    )

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Clean and validate message content."""
        v = v.strip()
        if not v:
            raise ValueError("Message cannot be empty")
        return v


class DirectMessageResponse(BaseModel):
    id: int
    sender_id: int
    receiver_id: int
    content: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class ConversationSummaryResponse(BaseModel):
    """
    One inbox entry.
    """
    partner_id: int
    partner: Optional[UserResponse] = None
    unread_count: int = Field(
        default=0,
        description="Messages from the partner not read yet"
    )
    last_message: Optional[DirectMessageResponse] = None

    class Config:
        from_attributes = True


class UnreadCountResponse(BaseModel):
    unread_count: int
