"""
Celery configuration for SkillLink project.

Only used when TASK_BACKEND=celery; the local backend runs tasks inline.
"""
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('config')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
