"""
Direct Message Endpoints

Endpoints:
----------
- GET   /messages                   - Inbox (one entry per conversation partner)
- GET   /messages/unread-count      - Unread messages for the current user
- GET   /messages/{partner_id}      - Conversation with a partner (marks it read)
- POST  /messages/{receiver_id}     - Send a message
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from eduhub.api.deps import get_current_user, get_store
from eduhub.models import User
from eduhub.repositories.store import RepositoryStore
from eduhub.schemas.message import (
    ConversationSummaryResponse,
    DirectMessageCreate,
    DirectMessageResponse,
    UnreadCountResponse,
)
from eduhub.services.exceptions import NotFoundError, ServiceError
from eduhub.services.message_service import MessageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["Messages"])


def get_message_service(store: RepositoryStore = Depends(get_store)) -> MessageService:
    """Dependency that provides MessageService instance."""
    return MessageService(store)


@router.get(
    "",
    response_model=List[ConversationSummaryResponse],
    summary="List conversations",
)
async def list_conversations(
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    """Every conversation partner with unread count and last message."""
    return await service.list_conversations(current_user.id)


@router.get(
    "/unread-count",
    response_model=UnreadCountResponse,
    summary="Get count of unread messages",
)
async def unread_count(
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    count = await service.unread_count(current_user.id)
    return UnreadCountResponse(unread_count=count)


@router.get(
    "/{partner_id}",
    response_model=List[DirectMessageResponse],
    summary="Get a conversation",
    description="Messages with one partner, oldest first. Received messages are marked as read.",
)
async def get_conversation(
    partner_id: int,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    return await service.get_conversation(current_user.id, partner_id)


@router.post(
    "/{receiver_id}",
    response_model=DirectMessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a message",
)
async def send_message(
    receiver_id: int,
    data: DirectMessageCreate,
    current_user: User = Depends(get_current_user),
    service: MessageService = Depends(get_message_service),
):
    try:
        return await service.send_message(current_user.id, receiver_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ServiceError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
