"""Services for Identity app."""
from typing import Optional
from uuid import UUID

from django.db.models import Q

from .models import User, UserRole


# Fields a user may change on their own profile
PROFILE_FIELDS = {
    'first_name', 'last_name', 'profile_image_url', 'university',
    'field', 'year_of_study', 'location', 'bio', 'skills',
}


def get_active_user(user_id: UUID) -> Optional[User]:
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        return None


def find_user_for_login(identifier: str) -> Optional[User]:
    """
    Resolve a login identifier to a user. Accepts username or email.
    """
    if '@' in identifier:
        user = User.objects.filter(email__iexact=identifier).order_by('date_joined').first()
        if user:
            return user
    return User.objects.filter(username=identifier).first()


def update_profile(user: User, data: dict) -> User:
    """
    Apply a partial profile update. Unknown or protected keys are ignored.
    """
    changed = []
    for key, value in data.items():
        if key not in PROFILE_FIELDS or value is None:
            continue
        if key == 'year_of_study' and not 1 <= value <= 10:
            raise ValueError("year_of_study must be between 1 and 10")
        if key == 'skills':
            value = [s.strip() for s in value if s and s.strip()]
        setattr(user, key, value)
        changed.append(key)

    if changed:
        user.save(update_fields=changed + ['updated_at'])
    return user


def search_users(query: str) -> list[User]:
    """
    Case-insensitive substring search on name, field and university.
    """
    query = (query or "").strip()
    if not query:
        return []

    return list(
        User.objects.filter(is_active=True).filter(
            Q(first_name__icontains=query) |
            Q(last_name__icontains=query) |
            Q(field__icontains=query) |
            Q(university__icontains=query)
        )
    )


def list_users() -> list[User]:
    return list(User.objects.all().order_by('-created_at'))


def admin_update_user(user_id: UUID, data: dict) -> Optional[User]:
    """
    Change a user's role and/or activation flag.
    """
    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        return None

    role = data.get('role')
    if role is not None:
        if role not in UserRole.values:
            raise ValueError(f"Unknown role: {role}")
        user.role = role

    if data.get('is_active') is not None:
        user.is_active = data['is_active']

    user.save()
    return user
