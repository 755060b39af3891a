"""Services for the Messaging app."""
import logging
from typing import List, Optional
from uuid import UUID

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models import Q

from apps.core.task_service import TaskService
from apps.identity.models import User
from .models import Message

logger = logging.getLogger(__name__)

# Every relay socket joins this group
RELAY_GROUP = "messaging_relay"


def list_user_messages(user_id: UUID) -> List[Message]:
    """All messages the user sent or received, newest first."""
    return list(
        Message.objects.filter(Q(sender_id=user_id) | Q(receiver_id=user_id)).order_by('-created_at')
    )


def get_conversation(user_id: UUID, other_user_id: UUID) -> List[Message]:
    """Messages between two users, oldest first."""
    return list(
        Message.objects.filter(
            Q(sender_id=user_id, receiver_id=other_user_id) |
            Q(sender_id=other_user_id, receiver_id=user_id)
        ).order_by('created_at')
    )


def send_message(sender, receiver_id: UUID, content: str) -> Optional[Message]:
    """
    Persist a direct message and announce it to relay clients once committed.

    Returns None if the receiver does not exist.
    """
    content = (content or "").strip()
    if not content:
        raise ValueError("Message content cannot be empty")
    if receiver_id == sender.id:
        raise ValueError("You cannot message yourself")

    try:
        receiver = User.objects.get(id=receiver_id)
    except User.DoesNotExist:
        return None

    with transaction.atomic():
        message = Message.objects.create(sender=sender, receiver=receiver, content=content)
        # A failed hint is only logged; the message row stays committed
        transaction.on_commit(lambda: TaskService.broadcast_new_message(message.id), robust=True)

    logger.info(f"Message {message.id} sent from {sender.id} to {receiver_id}")
    return message


def mark_read(message_id: UUID, user) -> Optional[Message]:
    """Receiver marks a message read. Returns None unless the user is the receiver."""
    try:
        message = Message.objects.get(id=message_id, receiver_id=user.id)
    except Message.DoesNotExist:
        return None

    if not message.read:
        message.read = True
        message.save(update_fields=['read'])
    return message


def unread_count(user_id: UUID) -> int:
    return Message.objects.filter(receiver_id=user_id, read=False).count()


def broadcast_new_message(message_id: UUID) -> bool:
    """
    Push a new_message hint to every connected relay client.

    Returns False if the message no longer exists.
    """
    try:
        message = Message.objects.get(id=message_id)
    except Message.DoesNotExist:
        return False

    channel_layer = get_channel_layer()
    if channel_layer is None:
        logger.warning("No channel layer configured; skipping new_message broadcast")
        return True

    async_to_sync(channel_layer.group_send)(
        RELAY_GROUP,
        {
            "type": "relay.frame",
            "sender_channel": None,
            "payload": {
                "type": "new_message",
                "message_id": str(message.id),
                "sender_id": str(message.sender_id),
                "receiver_id": str(message.receiver_id),
            },
        },
    )
    return True
