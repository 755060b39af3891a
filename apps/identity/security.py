"""
Who is calling? Shared by every app's routers.

The Django session wins when present; otherwise the `access_token`
cookie is decoded. Inactive accounts count as anonymous.
"""
from typing import Optional

from django.http import HttpRequest
from ninja.errors import HttpError

from .jwt_auth import get_user_id_from_token
from .models import User
from .permissions import get_user_permissions


def _user_from_cookie(request: HttpRequest) -> Optional[User]:
    token = request.COOKIES.get('access_token')
    user_id = get_user_id_from_token(token) if token else None
    if user_id is None:
        return None
    return User.objects.filter(id=user_id, is_active=True).first()


def get_current_user(request: HttpRequest) -> Optional[User]:
    session_user = getattr(request, 'user', None)
    if session_user is not None and session_user.is_authenticated and session_user.is_active:
        return session_user
    return _user_from_cookie(request)


def require_auth(request: HttpRequest) -> User:
    """401 unless someone is logged in."""
    user = get_current_user(request)
    if user is None:
        raise HttpError(401, "Authentication required")
    return user


def require_permission(request: HttpRequest, permission: str) -> User:
    """401 when anonymous, 403 when the caller's role lacks `permission`."""
    user = require_auth(request)
    if permission not in get_user_permissions(user):
        raise HttpError(403, "Permission denied")
    return user
