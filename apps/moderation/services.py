"""Services for Moderation app."""
from typing import List, Optional

from apps.feed.models import Announcement
from apps.identity.models import User
from apps.marketplace.models import Service, ServiceStatus
from apps.messaging.models import Message
from apps.network.models import Connection, ConnectionStatus
from apps.projects.models import Project, ProjectStatus
from .models import AuditLog

MAX_AUDIT_LOGS = 500


def get_platform_stats() -> dict:
    """
    Platform-wide counts for the admin dashboard.
    """
    return {
        'total_users': User.objects.count(),
        'active_users': User.objects.filter(is_active=True).count(),
        'total_projects': Project.objects.count(),
        'active_projects': Project.objects.filter(status=ProjectStatus.ACTIVE).count(),
        'total_services': Service.objects.count(),
        'pending_services': Service.objects.filter(status=ServiceStatus.PENDING_APPROVAL).count(),
        'total_messages': Message.objects.count(),
        'total_connections': Connection.objects.filter(status=ConnectionStatus.ACCEPTED).count(),
        'total_announcements': Announcement.objects.count(),
    }


def list_audit_logs(
    action: Optional[str] = None,
    target_type: Optional[str] = None,
    limit: int = 100,
) -> List[AuditLog]:
    qs = AuditLog.objects.select_related('performed_by')
    if action:
        qs = qs.filter(action=action)
    if target_type:
        qs = qs.filter(target_type=target_type)
    return list(qs[:max(1, min(limit, MAX_AUDIT_LOGS))])
