"""
Messaging API endpoints.

Direct messages between users. Real-time hints go out over the /ws relay.
"""
from typing import List
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.security import require_auth
from . import services
from .dtos import MessageIn, MessageOut, UnreadCountOut

router = Router(tags=["Messaging"])
conversations_router = Router(tags=["Messaging"])


@router.get("", response=List[MessageOut])
def list_messages(request: HttpRequest):
    """Everything the caller sent or received, newest first."""
    user = require_auth(request)
    return services.list_user_messages(user.id)


@router.post("", response=MessageOut)
def send_message(request: HttpRequest, payload: MessageIn):
    user = require_auth(request)
    try:
        message = services.send_message(user, payload.receiver_id, payload.content)
    except ValueError as e:
        raise HttpError(400, str(e))

    if message is None:
        raise HttpError(404, "Receiver not found")
    return message


@router.get("/unread-count", response=UnreadCountOut)
def unread_count(request: HttpRequest):
    user = require_auth(request)
    return {"count": services.unread_count(user.id)}


@router.post("/{message_id}/read", response=MessageOut)
def mark_read(request: HttpRequest, message_id: UUID):
    user = require_auth(request)
    message = services.mark_read(message_id, user)
    if message is None:
        raise HttpError(404, "Message not found")
    return message


@conversations_router.get("/{user_id}", response=List[MessageOut])
def get_conversation(request: HttpRequest, user_id: UUID):
    """Messages between the caller and another user, oldest first."""
    user = require_auth(request)
    return services.get_conversation(user.id, user_id)
