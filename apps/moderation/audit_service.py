"""
Audit trail for moderation actions.

Routers call log_action() right after a moderation change succeeds.
Writing the entry is best effort: if it fails, the error is logged and
the request still succeeds.

    log_action(
        action=AuditAction.APPROVE_SERVICE,
        target_type="Service",
        target_id=service.id,
        target_label=service.title,
        performed_by=request.auth_user,
    )
"""
import logging
from typing import Optional
from uuid import UUID

from .models import AuditLog

logger = logging.getLogger(__name__)


class AuditAction:
    # Marketplace
    APPROVE_SERVICE = "APPROVE_SERVICE"
    REJECT_SERVICE = "REJECT_SERVICE"
    APPROVE_SERVICE_REQUEST = "APPROVE_SERVICE_REQUEST"
    REJECT_SERVICE_REQUEST = "REJECT_SERVICE_REQUEST"

    # Feed
    DELETE_ANNOUNCEMENT = "DELETE_ANNOUNCEMENT"

    # Accounts
    UPDATE_USER = "UPDATE_USER"


def log_action(
    *,
    action: str,
    target_type: str,
    target_id: UUID,
    performed_by,
    target_label: str = "",
    context: Optional[dict] = None,
) -> Optional[AuditLog]:
    """
    Record `performed_by` doing `action` to the object `target_type`/`target_id`.

    `context` is stored as JSON. Returns the new entry, or None when it
    could not be written.
    """
    try:
        return AuditLog.objects.create(
            action=action,
            target_type=target_type,
            target_id=target_id,
            target_label=(target_label or "")[:255],
            performed_by=performed_by,
            context=context or {},
        )
    except Exception:
        logger.exception(f"Audit entry for {action} on {target_type} {target_id} was not written")
        return None
