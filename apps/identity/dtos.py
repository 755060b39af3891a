"""DTOs for Identity app."""
from datetime import datetime
from uuid import UUID
from typing import Optional, List

from ninja import Schema

from .permissions import get_user_permissions


class UserOut(Schema):
    id: UUID
    username: str
    email: str
    first_name: str
    last_name: str
    role: str
    profile_image_url: Optional[str] = None
    university: Optional[str] = None
    field: Optional[str] = None
    year_of_study: Optional[int] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    connections: int = 0
    is_active: bool
    created_at: datetime


class CurrentUserOut(UserOut):
    permissions: List[str] = []

    @staticmethod
    def resolve_permissions(obj):
        return get_user_permissions(obj)


class PublicUserOut(Schema):
    """Profile as shown to other users (no email, no flags)."""
    id: UUID
    username: str
    first_name: str
    last_name: str
    role: str
    profile_image_url: Optional[str] = None
    university: Optional[str] = None
    field: Optional[str] = None
    year_of_study: Optional[int] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    connections: int = 0


class ProfileUpdate(Schema):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    university: Optional[str] = None
    field: Optional[str] = None
    year_of_study: Optional[int] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None


class UserAdminUpdate(Schema):
    role: Optional[str] = None
    is_active: Optional[bool] = None
