"""
Message Repository

Data access layer for direct messages between users.
"""

from typing import List, Optional

from eduhub.db.database import Database
from eduhub.models import Message
from eduhub.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for Message records."""

    def __init__(self, db: Database):
        super().__init__(Message, db.messages, db)

    async def get_user_messages(self, user_id: int) -> List[Message]:
        """Get every message the user sent or received, unordered."""
        return await self.filter(
            lambda message: user_id in (message.sender_id, message.receiver_id)
        )

    async def get_conversation(self, user_a_id: int, user_b_id: int) -> List[Message]:
        """
        Get messages exchanged between exactly two users.

        Returns:
            Messages in either direction ordered by created_at ascending
        """
        messages = await self.filter(
            lambda message: (
                (message.sender_id, message.receiver_id) in
                ((user_a_id, user_b_id), (user_b_id, user_a_id))
            )
        )
        return sorted(messages, key=lambda message: (message.created_at, message.id))

    async def create_message(
        self,
        sender_id: int,
        receiver_id: int,
        content: str
    ) -> Message:
        """Create a new message. New messages always start unread."""
        return await self.create(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            is_read=False
        )

    async def mark_as_read(self, message_id: int) -> Optional[Message]:
        """
        Mark a message as read.

        Idempotent; there is no way back to unread.
        """
        message = await self.get_by_id(message_id)
        if not message:
            return None
        if message.is_read:
            return message
        return await self.update(message_id, is_read=True)

    async def count_unread(self, receiver_id: int) -> int:
        """Count messages received by a user that are still unread."""
        unread = await self.filter(
            lambda message: message.receiver_id == receiver_id and not message.is_read
        )
        return len(unread)
