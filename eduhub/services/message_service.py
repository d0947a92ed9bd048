"""
Message Service

Direct messaging between users:
1. Inbox: one summary per conversation partner
2. Conversation view (marks received messages as read)
3. Sending
"""

import asyncio
import logging
from typing import List

from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.message import (
    ConversationSummaryResponse,
    DirectMessageCreate,
    DirectMessageResponse,
)
from eduhub.services.exceptions import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


class RecipientNotFoundError(NotFoundError):
    """Receiver of a message does not exist."""
    pass


class MessageService:
    """Service for direct messages."""

    def __init__(self, store: RepositoryStore):
        self.store = store

    async def list_conversations(self, user_id: int) -> List[ConversationSummaryResponse]:
        """Get the user's inbox."""
        summaries = await self.store.get_conversations(user_id)
        return [
            ConversationSummaryResponse.model_validate(summary)
            for summary in summaries
        ]

    async def get_conversation(
        self,
        user_id: int,
        partner_id: int
    ) -> List[DirectMessageResponse]:
        """
        Get the conversation with a partner, oldest first.

        Messages the user received in it are marked as read, and the
        returned list already reflects that.
        """
        conversation = await self.store.get_conversation(user_id, partner_id)

        unread = [
            message for message in conversation
            if message.receiver_id == user_id and not message.is_read
        ]
        if unread:
            marked = await asyncio.gather(
                *(self.store.mark_message_as_read(message.id) for message in unread)
            )
            updated = {message.id: message for message in marked if message}
            conversation = [updated.get(message.id, message) for message in conversation]

        return [DirectMessageResponse.model_validate(message) for message in conversation]

    async def send_message(
        self,
        sender_id: int,
        receiver_id: int,
        data: DirectMessageCreate
    ) -> DirectMessageResponse:
        """
        Send a message.

        Raises:
            ServiceError: If the user messages themselves
            RecipientNotFoundError: If the receiver does not exist
        """
        if sender_id == receiver_id:
            raise ServiceError("You cannot send a message to yourself")

        receiver = await self.store.get_user(receiver_id)
        if not receiver:
            raise RecipientNotFoundError("User not found")

        message = await self.store.create_message({
            "sender_id": sender_id,
            "receiver_id": receiver_id,
            "content": data.content,
        })
        logger.debug(f"Message sent: id={message.id}, from={sender_id}, to={receiver_id}")
        return DirectMessageResponse.model_validate(message)

    async def unread_count(self, user_id: int) -> int:
        return await self.store.count_unread_messages(user_id)
