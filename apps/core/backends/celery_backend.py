"""
Celery task backend (TASK_BACKEND=celery).

Jobs are published by name to the broker in CELERY_BROKER_URL and picked
up by `celery -A config worker`.
"""

import uuid
import logging
from typing import Any, Dict

from apps.core.task_service import TaskServiceInterface

logger = logging.getLogger(__name__)


# TaskService job name -> registered Celery task name
CELERY_TASKS = {
    "broadcast_new_message": "apps.messaging.tasks.broadcast_new_message_task",
}


class CeleryTaskService(TaskServiceInterface):

    def send_task(
        self,
        task_name: str,
        payload: Dict[str, Any],
        delay_seconds: int = 0,
    ) -> str:
        celery_name = CELERY_TASKS.get(task_name)
        if celery_name is None:
            raise ValueError(f"No Celery task mapped for: {task_name}")

        from config.celery import app

        task_id = str(uuid.uuid4())
        app.send_task(
            celery_name,
            kwargs=payload,
            task_id=task_id,
            countdown=delay_seconds or None,
        )
        logger.info(f"[CELERY] Queued {task_name} as {celery_name} (id={task_id})")
        return task_id
