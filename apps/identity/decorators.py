from functools import wraps
from typing import Callable

from django.http import HttpRequest

from .security import require_permission


def has_permission(required_perm: str):
    """
    Guard a ninja view with a role permission (401 anonymous, 403 missing).

    The checked user is left on `request.auth_user`:

        @router.post("/{service_id}/approve")
        @has_permission(Permissions.MARKETPLACE_APPROVE_SERVICE)
        def approve(request, service_id: UUID):
            ... request.auth_user ...
    """
    def decorator(view_func: Callable):
        @wraps(view_func)
        def guarded(request: HttpRequest, *args, **kwargs):
            request.auth_user = require_permission(request, required_perm)
            return view_func(request, *args, **kwargs)
        return guarded
    return decorator
