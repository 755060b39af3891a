"""
Authentication and user profile endpoints.

Provides login, logout, token refresh, the current-user profile and
public user lookup/search.
Uses JWT tokens in httpOnly cookies for stateless authentication;
a Django session login is accepted as well.
"""
import os
from typing import List, Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import authenticate
from django.http import HttpRequest, HttpResponse
from ninja import Router, Schema
from ninja.errors import HttpError

from .dtos import CurrentUserOut, PublicUserOut, ProfileUpdate
from .jwt_auth import (
    ACCESS,
    REFRESH,
    create_access_token,
    create_token_pair,
    decode_token,
    token_cookie_settings,
)
from .models import User
from .security import require_auth
from . import services

auth_router = Router(tags=["Auth"])
users_router = Router(tags=["Users"])


# =============================================================================
# Schemas
# =============================================================================

class LoginSchema(Schema):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class TokenResponse(Schema):
    success: bool
    user: Optional[CurrentUserOut] = None
    message: Optional[str] = None


# =============================================================================
# Helper Functions
# =============================================================================

def is_production() -> bool:
    """Secure cookies outside of DEBUG."""
    return os.getenv('DJANGO_SECURE_COOKIES', '').lower() == 'true' or not settings.DEBUG


def _json_response(payload: TokenResponse) -> HttpResponse:
    return HttpResponse(payload.model_dump_json(), content_type='application/json')


# =============================================================================
# Auth Endpoints
# =============================================================================

@auth_router.post("/login", response=TokenResponse)
def login_user(request: HttpRequest, payload: LoginSchema):
    """
    Check credentials and issue the access/refresh cookie pair.

    Accepts either a username or an email as the identifier.
    """
    identifier = payload.username or payload.email
    if not identifier:
        raise HttpError(400, "Username or email is required")

    candidate = services.find_user_for_login(identifier)
    if candidate is None:
        raise HttpError(401, "Invalid credentials")

    if not candidate.is_active:
        raise HttpError(401, "Account is disabled")

    user = authenticate(request, username=candidate.username, password=payload.password)
    if user is None:
        raise HttpError(401, "Invalid credentials")

    access_token, refresh_token = create_token_pair(user.id, user.role)
    response = _json_response(TokenResponse(success=True, user=CurrentUserOut.from_orm(user)))

    prod = is_production()
    response.set_cookie('access_token', access_token, **token_cookie_settings(ACCESS, prod))
    response.set_cookie('refresh_token', refresh_token, **token_cookie_settings(REFRESH, prod))
    return response


@auth_router.post("/logout", response=TokenResponse)
def logout_user(request: HttpRequest):
    """Drop both token cookies."""
    response = _json_response(TokenResponse(success=True, message="Logged out"))
    response.delete_cookie('access_token', path='/')
    response.delete_cookie('refresh_token', path='/')
    return response


@auth_router.post("/refresh", response=TokenResponse)
def refresh_token(request: HttpRequest):
    """Trade a valid refresh cookie for a new access cookie."""
    refresh_token_value = request.COOKIES.get('refresh_token')
    if not refresh_token_value:
        raise HttpError(401, "No refresh token")

    payload = decode_token(refresh_token_value)
    if not payload or payload.get('type') != REFRESH:
        raise HttpError(401, "Invalid refresh token")

    try:
        user = User.objects.get(id=UUID(payload['sub']), is_active=True)
    except (ValueError, KeyError, User.DoesNotExist):
        raise HttpError(401, "Invalid refresh token")

    response = _json_response(TokenResponse(success=True, user=CurrentUserOut.from_orm(user)))
    response.set_cookie(
        'access_token',
        create_access_token(user.id, user.role),
        **token_cookie_settings(ACCESS, is_production()),
    )
    return response


@auth_router.get("/user", response=CurrentUserOut)
def get_me(request: HttpRequest):
    """The caller, with the permissions their role grants."""
    return require_auth(request)


# =============================================================================
# User Endpoints
# =============================================================================

@users_router.put("/profile", response=CurrentUserOut)
def update_my_profile(request: HttpRequest, payload: ProfileUpdate):
    """
    Update the caller's own profile. Role, email and counters are not writable.
    """
    user = require_auth(request)
    try:
        return services.update_profile(user, payload.dict(exclude_unset=True))
    except ValueError as e:
        raise HttpError(400, str(e))


@users_router.get("/search", response=List[PublicUserOut])
def search_users(request: HttpRequest, q: str = ""):
    """
    Search users by name, field or university. Empty query returns [].
    """
    return services.search_users(q)


@users_router.get("/{user_id}", response=PublicUserOut)
def get_user_profile(request: HttpRequest, user_id: UUID):
    """
    Public profile of a single user.
    """
    user = services.get_active_user(user_id)
    if not user:
        raise HttpError(404, "User not found")
    return user
