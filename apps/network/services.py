"""Services for the Network app."""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from apps.identity.models import User
from .models import Connection, ConnectionStatus

logger = logging.getLogger(__name__)


def request_connection(requester, receiver_id: UUID) -> Optional[Connection]:
    """
    Ask another user to connect.

    Returns None if the receiver does not exist. Raises ValueError for
    self-connections or when the pair is already pending or connected.
    Both user rows stay locked from the duplicate check to the insert,
    so crossing requests for the same pair are serialized.
    """
    if receiver_id == requester.id:
        raise ValueError("You cannot connect with yourself")

    with transaction.atomic():
        users = list(
            User.objects.select_for_update().filter(id__in=[requester.id, receiver_id]).order_by('id')
        )
        receiver = next((u for u in users if u.id != requester.id), None)
        if receiver is None:
            return None

        existing = Connection.objects.filter(
            Q(requester=requester, receiver=receiver) | Q(requester=receiver, receiver=requester),
            status__in=[ConnectionStatus.PENDING, ConnectionStatus.ACCEPTED],
        )
        if existing.exists():
            raise ValueError("A connection with this user already exists")

        connection = Connection.objects.create(requester=requester, receiver=receiver)

    logger.info(f"User {requester.id} requested connection with {receiver_id}")
    return connection


def list_connections(user_id: UUID) -> List[Connection]:
    """Accepted connections the user is part of."""
    return list(
        Connection.objects.filter(
            Q(requester_id=user_id) | Q(receiver_id=user_id),
            status=ConnectionStatus.ACCEPTED,
        ).order_by('-accepted_at')
    )


def list_pending(user_id: UUID) -> List[Connection]:
    """Pending requests addressed to the user."""
    return list(
        Connection.objects.filter(receiver_id=user_id, status=ConnectionStatus.PENDING).order_by('-created_at')
    )


def _get_pending_for_receiver(connection_id: UUID, user) -> Optional[Connection]:
    try:
        connection = Connection.objects.select_for_update().get(id=connection_id)
    except Connection.DoesNotExist:
        return None

    if connection.receiver_id != user.id:
        raise PermissionError("Only the receiver can answer this request")
    if connection.status != ConnectionStatus.PENDING:
        raise ValueError(f"Connection is already {connection.status}")
    return connection


def accept_connection(connection_id: UUID, user) -> Optional[Connection]:
    """
    Accept a pending request. Both users' connection counters go up.
    """
    with transaction.atomic():
        connection = _get_pending_for_receiver(connection_id, user)
        if connection is None:
            return None

        connection.status = ConnectionStatus.ACCEPTED
        connection.accepted_at = timezone.now()
        connection.save(update_fields=['status', 'accepted_at'])

        User.objects.filter(id__in=[connection.requester_id, connection.receiver_id]).update(
            connections=F('connections') + 1
        )

    logger.info(f"Connection {connection_id} accepted")
    return connection


def reject_connection(connection_id: UUID, user) -> Optional[Connection]:
    with transaction.atomic():
        connection = _get_pending_for_receiver(connection_id, user)
        if connection is None:
            return None

        connection.status = ConnectionStatus.REJECTED
        connection.save(update_fields=['status'])

    return connection
