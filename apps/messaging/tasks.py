"""Celery tasks for Messaging app."""
from uuid import UUID

from celery import shared_task
from . import services


@shared_task
def broadcast_new_message_task(message_id: str):
    """
    Push the new_message hint to relay clients from a worker.
    """
    if services.broadcast_new_message(UUID(message_id)):
        return f"Broadcast message {message_id}"
    return f"Message {message_id} not found. Skipping."
