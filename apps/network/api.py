"""
Network API endpoints.

Connection requests between users.
"""
from typing import List
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.security import require_auth
from . import services
from .dtos import ConnectionIn, ConnectionOut

router = Router(tags=["Network"])


@router.post("", response=ConnectionOut)
def request_connection(request: HttpRequest, payload: ConnectionIn):
    user = require_auth(request)
    try:
        connection = services.request_connection(user, payload.receiver_id)
    except ValueError as e:
        raise HttpError(400, str(e))

    if connection is None:
        raise HttpError(404, "User not found")
    return connection


@router.get("", response=List[ConnectionOut])
def list_connections(request: HttpRequest):
    user = require_auth(request)
    return services.list_connections(user.id)


@router.get("/pending", response=List[ConnectionOut])
def list_pending(request: HttpRequest):
    """Requests waiting for the caller's answer."""
    user = require_auth(request)
    return services.list_pending(user.id)


def _answer(request: HttpRequest, connection_id: UUID, action):
    user = require_auth(request)
    try:
        connection = action(connection_id, user)
    except PermissionError as e:
        raise HttpError(403, str(e))
    except ValueError as e:
        raise HttpError(400, str(e))

    if connection is None:
        raise HttpError(404, "Connection not found")
    return connection


@router.post("/{connection_id}/accept", response=ConnectionOut)
def accept_connection(request: HttpRequest, connection_id: UUID):
    return _answer(request, connection_id, services.accept_connection)


@router.post("/{connection_id}/reject", response=ConnectionOut)
def reject_connection(request: HttpRequest, connection_id: UUID):
    return _answer(request, connection_id, services.reject_connection)
