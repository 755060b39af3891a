"""
Core app - Shared abstractions and utilities.

This app provides platform-agnostic interfaces for:
- Task execution (TaskService)
- Demo data seeding (manage.py seed)

The task abstraction allows switching between:
- Local development (sync execution)
- Celery + Redis
"""
