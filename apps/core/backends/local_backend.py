"""
Inline task backend.

Handlers run inside the calling request, so there is nothing to deploy
besides Django itself. This is the default (TASK_BACKEND=local).
"""

import uuid
import logging
from typing import Any, Callable, Dict
from uuid import UUID

from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)


TASK_HANDLERS: Dict[str, Callable[..., Any]] = {}


def register_handler(task_name: str):
    """Make the decorated function the inline handler for `task_name`."""
    def decorator(func):
        TASK_HANDLERS[task_name] = func
        return func
    return decorator


class LocalTaskService(TaskServiceInterface):

    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        task_id = str(uuid.uuid4())

        handler = TASK_HANDLERS.get(task_name)
        if handler is None:
            logger.warning(f"[LOCAL] {task_name} has no handler, dropped (id={task_id})")
            return task_id

        if delay_seconds:
            logger.warning(f"[LOCAL] {task_name} runs now, delay of {delay_seconds}s not supported")

        try:
            result = handler(**payload)
        except Exception:
            logger.exception(f"[LOCAL] {task_name} failed (id={task_id})")
            raise

        logger.info(f"[LOCAL] {task_name} done (id={task_id}): {result}")
        return task_id


@register_handler("broadcast_new_message")
def handle_broadcast_new_message(message_id: str):
    from apps.messaging.services import broadcast_new_message

    if broadcast_new_message(UUID(message_id)):
        return f"Broadcast message {message_id}"
    return f"Message {message_id} not found. Skipping."
