"""
Background work dispatch.

Callers never talk to a queue directly; they go through TaskService,
which hands the job to whichever backend TASK_BACKEND names:

    local   run the handler inline (development, tests)
    celery  enqueue a Celery task (needs a broker and a worker)

    from apps.core.task_service import TaskService
    TaskService.broadcast_new_message(message.id)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict
from uuid import UUID

from django.conf import settings

logger = logging.getLogger(__name__)


class TaskServiceInterface(ABC):
    """Contract every task backend implements."""

    @abstractmethod
    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        """
        Hand `payload` to the job registered as `task_name`.

        The payload must be JSON-serializable (ids as strings). Returns
        an id the caller can log.
        """


BACKENDS = {
    'local': 'apps.core.backends.local_backend.LocalTaskService',
    'celery': 'apps.core.backends.celery_backend.CeleryTaskService',
}


def _get_backend() -> TaskServiceInterface:
    from django.utils.module_loading import import_string

    name = getattr(settings, 'TASK_BACKEND', 'local')
    try:
        backend_path = BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unknown TASK_BACKEND: {name}")
    return import_string(backend_path)()


class TaskService:
    """One static method per background job."""

    @staticmethod
    def broadcast_new_message(message_id: UUID) -> str:
        """
        Tell connected WebSocket clients that a message was stored.

        Called by the messaging app once the message row is committed.
        """
        logger.info(f"Dispatching new_message broadcast for {message_id}")
        return _get_backend().send_task(
            task_name="broadcast_new_message",
            payload={"message_id": str(message_id)},
        )
