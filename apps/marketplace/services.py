"""Services for the Marketplace app."""
import logging
from typing import List, Optional
from uuid import UUID

from django.db.models import Q
from django.utils import timezone

from .dtos import ServiceIn
from .models import Service, ServiceRequest, ServiceStatus, ServiceRequestStatus

logger = logging.getLogger(__name__)


# =============================================================================
# Listings
# =============================================================================

def list_active_services() -> List[Service]:
    return list(Service.objects.filter(status=ServiceStatus.ACTIVE).order_by('-created_at'))


def list_provider_services(provider_id: UUID) -> List[Service]:
    """All of a provider's services, whatever their status."""
    return list(Service.objects.filter(provider_id=provider_id).order_by('-created_at'))


def get_service(service_id: UUID) -> Optional[Service]:
    try:
        return Service.objects.get(id=service_id)
    except Service.DoesNotExist:
        return None


def create_service(provider, payload: ServiceIn) -> Service:
    """
    New services always start in pending_approval.
    """
    return Service.objects.create(
        provider=provider,
        status=ServiceStatus.PENDING_APPROVAL,
        **payload.dict(),
    )


def search_services(query: str) -> List[Service]:
    """
    Search active services on title, description and category.
    """
    query = (query or "").strip()
    if not query:
        return []

    return list(
        Service.objects.filter(status=ServiceStatus.ACTIVE).filter(
            Q(title__icontains=query) |
            Q(description__icontains=query) |
            Q(category__icontains=query)
        ).order_by('-created_at')
    )


# =============================================================================
# Service requests
# =============================================================================

def request_service(service_id: UUID, requester, message: Optional[str] = None) -> Optional[ServiceRequest]:
    service = get_service(service_id)
    if service is None:
        return None

    if service.status != ServiceStatus.ACTIVE:
        raise ValueError("This service is not available")
    if service.provider_id == requester.id:
        raise ValueError("You cannot request your own service")

    service_request = ServiceRequest.objects.create(
        service=service,
        requester=requester,
        message=message,
    )
    logger.info(f"User {requester.id} requested service {service_id}")
    return service_request


def list_user_requests(user_id: UUID) -> List[ServiceRequest]:
    return list(ServiceRequest.objects.filter(requester_id=user_id))


def complete_request(request_id: UUID, user) -> Optional[ServiceRequest]:
    """
    Provider marks an approved request as completed.
    """
    try:
        service_request = ServiceRequest.objects.select_related('service').get(id=request_id)
    except ServiceRequest.DoesNotExist:
        return None

    if service_request.service.provider_id != user.id:
        raise PermissionError("Only the provider can complete this request")
    if service_request.status != ServiceRequestStatus.APPROVED:
        raise ValueError(f"Cannot complete request with status '{service_request.status}'")

    service_request.status = ServiceRequestStatus.COMPLETED
    service_request.completed_at = timezone.now()
    service_request.save(update_fields=['status', 'completed_at'])
    return service_request


# =============================================================================
# Moderation
# =============================================================================

def list_pending_services() -> List[Service]:
    return list(Service.objects.filter(status=ServiceStatus.PENDING_APPROVAL).order_by('created_at'))


def approve_service(service_id: UUID) -> Optional[Service]:
    service = get_service(service_id)
    if service is None:
        return None

    service.status = ServiceStatus.ACTIVE
    service.save(update_fields=['status', 'updated_at'])
    logger.info(f"Service {service_id} approved")
    return service


def reject_service(service_id: UUID) -> Optional[Service]:
    """Take a service off the marketplace (status inactive)."""
    service = get_service(service_id)
    if service is None:
        return None

    service.status = ServiceStatus.INACTIVE
    service.save(update_fields=['status', 'updated_at'])
    logger.info(f"Service {service_id} rejected")
    return service


def list_pending_requests() -> List[ServiceRequest]:
    return list(
        ServiceRequest.objects.filter(status=ServiceRequestStatus.PENDING).order_by('requested_at')
    )


def _get_pending_request(request_id: UUID) -> Optional[ServiceRequest]:
    try:
        service_request = ServiceRequest.objects.get(id=request_id)
    except ServiceRequest.DoesNotExist:
        return None

    if service_request.status != ServiceRequestStatus.PENDING:
        raise ValueError(f"Cannot moderate request with status '{service_request.status}'")
    return service_request


def approve_request(request_id: UUID) -> Optional[ServiceRequest]:
    service_request = _get_pending_request(request_id)
    if service_request is None:
        return None

    service_request.status = ServiceRequestStatus.APPROVED
    service_request.approved_at = timezone.now()
    service_request.save(update_fields=['status', 'approved_at'])
    return service_request


def reject_request(request_id: UUID) -> Optional[ServiceRequest]:
    service_request = _get_pending_request(request_id)
    if service_request is None:
        return None

    service_request.status = ServiceRequestStatus.REJECTED
    service_request.save(update_fields=['status'])
    return service_request
