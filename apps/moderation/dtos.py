"""DTOs for Moderation app."""
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from ninja import Schema


class AuditLogOut(Schema):
    id: UUID
    action: str
    target_type: str
    target_id: UUID
    target_label: str
    performed_by_id: Optional[UUID] = None
    performed_by_name: Optional[str] = None
    performed_at: datetime
    context: Any

    @staticmethod
    def resolve_performed_by_name(obj):
        if obj.performed_by_id is None:
            return None
        return obj.performed_by.display_name


class PlatformStatsOut(Schema):
    total_users: int
    active_users: int
    total_projects: int
    active_projects: int
    total_services: int
    pending_services: int
    total_messages: int
    total_connections: int
    total_announcements: int
