"""
Moderation API endpoints.

Admin panel: service and request moderation, user management,
platform statistics and the audit trail.
"""
from typing import List, Optional
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity import services as identity_services
from apps.identity.decorators import has_permission
from apps.identity.dtos import UserOut, UserAdminUpdate
from apps.identity.permissions import Permissions
from apps.marketplace import services as marketplace_services
from apps.marketplace.dtos import ServiceOut, ServiceRequestOut
from . import services
from .audit_service import log_action, AuditAction
from .dtos import AuditLogOut, PlatformStatsOut

router = Router(tags=["Moderation"])


# =============================================================================
# Services
# =============================================================================

@router.get("/pending-services", response=List[ServiceOut])
@has_permission(Permissions.MARKETPLACE_APPROVE_SERVICE)
def pending_services(request: HttpRequest):
    return marketplace_services.list_pending_services()


@router.delete("/services/{service_id}", response=ServiceOut)
@has_permission(Permissions.MARKETPLACE_APPROVE_SERVICE)
def reject_service(request: HttpRequest, service_id: UUID):
    """Reject a service. It stays in the database as inactive."""
    service = marketplace_services.reject_service(service_id)
    if service is None:
        raise HttpError(404, "Service not found")

    log_action(
        action=AuditAction.REJECT_SERVICE,
        target_type="Service",
        target_id=service.id,
        target_label=service.title,
        performed_by=request.auth_user,
    )
    return service


# =============================================================================
# Service requests
# =============================================================================

@router.get("/service-requests", response=List[ServiceRequestOut])
@has_permission(Permissions.MARKETPLACE_MODERATE_REQUEST)
def pending_service_requests(request: HttpRequest):
    return marketplace_services.list_pending_requests()


@router.post("/service-requests/{request_id}/approve", response=ServiceRequestOut)
@has_permission(Permissions.MARKETPLACE_MODERATE_REQUEST)
def approve_service_request(request: HttpRequest, request_id: UUID):
    try:
        service_request = marketplace_services.approve_request(request_id)
    except ValueError as e:
        raise HttpError(400, str(e))

    if service_request is None:
        raise HttpError(404, "Service request not found")

    log_action(
        action=AuditAction.APPROVE_SERVICE_REQUEST,
        target_type="ServiceRequest",
        target_id=service_request.id,
        performed_by=request.auth_user,
        context={"service_id": str(service_request.service_id)},
    )
    return service_request


@router.post("/service-requests/{request_id}/reject", response=ServiceRequestOut)
@has_permission(Permissions.MARKETPLACE_MODERATE_REQUEST)
def reject_service_request(request: HttpRequest, request_id: UUID):
    try:
        service_request = marketplace_services.reject_request(request_id)
    except ValueError as e:
        raise HttpError(400, str(e))

    if service_request is None:
        raise HttpError(404, "Service request not found")

    log_action(
        action=AuditAction.REJECT_SERVICE_REQUEST,
        target_type="ServiceRequest",
        target_id=service_request.id,
        performed_by=request.auth_user,
        context={"service_id": str(service_request.service_id)},
    )
    return service_request


# =============================================================================
# Users
# =============================================================================

@router.get("/users", response=List[UserOut])
@has_permission(Permissions.IDENTITY_VIEW_USER)
def list_users(request: HttpRequest):
    return identity_services.list_users()


@router.put("/users/{user_id}", response=UserOut)
@has_permission(Permissions.IDENTITY_MANAGE_USER)
def update_user(request: HttpRequest, user_id: UUID, payload: UserAdminUpdate):
    """Change a user's role or activation flag. Admin only."""
    changes = payload.dict(exclude_unset=True)
    try:
        user = identity_services.admin_update_user(user_id, changes)
    except ValueError as e:
        raise HttpError(400, str(e))

    if user is None:
        raise HttpError(404, "User not found")

    log_action(
        action=AuditAction.UPDATE_USER,
        target_type="User",
        target_id=user.id,
        target_label=user.username,
        performed_by=request.auth_user,
        context=changes,
    )
    return user


# =============================================================================
# Dashboard
# =============================================================================

@router.get("/stats", response=PlatformStatsOut)
@has_permission(Permissions.MODERATION_VIEW_STATS)
def platform_stats(request: HttpRequest):
    return services.get_platform_stats()


@router.get("/audit-logs", response=List[AuditLogOut])
@has_permission(Permissions.MODERATION_VIEW_AUDIT)
def list_audit_logs(
    request: HttpRequest,
    action: Optional[str] = None,
    target_type: Optional[str] = None,
    limit: int = 100,
):
    """
    Recorded moderation actions, newest first.
    Supports filtering by action name and target type; capped at 500 rows.
    """
    return services.list_audit_logs(action=action, target_type=target_type, limit=limit)
