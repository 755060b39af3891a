"""
Signed session tokens for SkillLink.

Two kinds of token travel in httpOnly cookies: a short `access` token
checked on every request and a longer `refresh` token that can only be
traded for a new access token at /api/auth/refresh.
"""
import os
import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID
from django.conf import settings


JWT_SECRET = os.getenv('JWT_SECRET', settings.SECRET_KEY)
JWT_ALGORITHM = 'HS256'
ACCESS_TOKEN_LIFETIME = timedelta(minutes=int(os.getenv('JWT_ACCESS_MINUTES', '15')))
REFRESH_TOKEN_LIFETIME = timedelta(days=int(os.getenv('JWT_REFRESH_DAYS', '7')))

ACCESS = 'access'
REFRESH = 'refresh'


def _encode(user_id: UUID, token_type: str, lifetime: timedelta, **claims) -> str:
    issued_at = datetime.now(timezone.utc)
    claims.update({
        'sub': str(user_id),
        'type': token_type,
        'iat': issued_at,
        'exp': issued_at + lifetime,
    })
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def create_access_token(user_id: UUID, role: str) -> str:
    """Access token carrying the user's role."""
    return _encode(user_id, ACCESS, ACCESS_TOKEN_LIFETIME, role=role)


def create_refresh_token(user_id: UUID) -> str:
    return _encode(user_id, REFRESH, REFRESH_TOKEN_LIFETIME)


def create_token_pair(user_id: UUID, role: str) -> Tuple[str, str]:
    """Returns (access_token, refresh_token)."""
    return create_access_token(user_id, role), create_refresh_token(user_id)


def decode_token(token: str) -> Optional[dict]:
    """
    Verified claims of a token, or None when it is expired, tampered
    with or otherwise unreadable.
    """
    try:
        return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def get_user_id_from_token(token: str) -> Optional[UUID]:
    """
    User id from an access token. Refresh tokens are refused so they
    cannot stand in for an access token.
    """
    claims = decode_token(token)
    if not claims or claims.get('type') != ACCESS:
        return None
    try:
        return UUID(claims['sub'])
    except (KeyError, ValueError):
        return None


def token_cookie_settings(token_type: str, secure: bool = False) -> dict:
    """
    Keyword arguments for HttpResponse.set_cookie().

    The cookie lives exactly as long as the token inside it.
    """
    lifetime = ACCESS_TOKEN_LIFETIME if token_type == ACCESS else REFRESH_TOKEN_LIFETIME
    return {
        'httponly': True,
        'secure': secure,
        'samesite': 'Lax',
        'path': '/',
        'max_age': int(lifetime.total_seconds()),
    }
