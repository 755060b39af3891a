"""
Marketplace API endpoints.

Peer-offered services and requests to engage them.
"""
from typing import List, Optional
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.decorators import has_permission
from apps.identity.permissions import Permissions
from apps.identity.security import require_auth
from apps.moderation.audit_service import log_action, AuditAction
from . import services
from .dtos import ServiceIn, ServiceOut, ServiceRequestIn, ServiceRequestOut

router = Router(tags=["Marketplace"])


@router.get("", response=List[ServiceOut])
def list_services(request: HttpRequest, provider: Optional[UUID] = None):
    """
    List services.

    Without `provider` only active services are returned. With `provider`
    every service of that provider is returned, whatever its status.
    """
    if provider:
        return services.list_provider_services(provider)
    return services.list_active_services()


@router.post("", response=ServiceOut)
def create_service(request: HttpRequest, payload: ServiceIn):
    user = require_auth(request)
    return services.create_service(user, payload)


@router.get("/search", response=List[ServiceOut])
def search_services(request: HttpRequest, q: str = ""):
    return services.search_services(q)


@router.get("/requests", response=List[ServiceRequestOut])
def my_requests(request: HttpRequest):
    """The caller's own service requests."""
    user = require_auth(request)
    return services.list_user_requests(user.id)


@router.post("/requests/{request_id}/complete", response=ServiceRequestOut)
def complete_request(request: HttpRequest, request_id: UUID):
    user = require_auth(request)
    try:
        service_request = services.complete_request(request_id, user)
    except PermissionError as e:
        raise HttpError(403, str(e))
    except ValueError as e:
        raise HttpError(400, str(e))

    if service_request is None:
        raise HttpError(404, "Service request not found")
    return service_request


@router.get("/{service_id}", response=ServiceOut)
def get_service(request: HttpRequest, service_id: UUID):
    service = services.get_service(service_id)
    if not service:
        raise HttpError(404, "Service not found")
    return service


@router.post("/{service_id}/request")
def request_service(request: HttpRequest, service_id: UUID, payload: Optional[ServiceRequestIn] = None):
    user = require_auth(request)
    message = payload.message if payload else None
    try:
        service_request = services.request_service(service_id, user, message)
    except ValueError as e:
        raise HttpError(400, str(e))

    if service_request is None:
        raise HttpError(404, "Service not found")
    return {"message": "Service request submitted", "request_id": str(service_request.id)}


@router.post("/{service_id}/approve", response=ServiceOut)
@has_permission(Permissions.MARKETPLACE_APPROVE_SERVICE)
def approve_service(request: HttpRequest, service_id: UUID):
    service = services.approve_service(service_id)
    if service is None:
        raise HttpError(404, "Service not found")

    log_action(
        action=AuditAction.APPROVE_SERVICE,
        target_type="Service",
        target_id=service.id,
        target_label=service.title,
        performed_by=request.auth_user,
    )
    return service
