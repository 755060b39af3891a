from typing import List, Dict
from .models import UserRole, User

# Define all available permissions here for reference
class Permissions:
    # Identity
    IDENTITY_VIEW_USER = "identity.view_user"
    IDENTITY_MANAGE_USER = "identity.manage_user"

    # Marketplace
    MARKETPLACE_APPROVE_SERVICE = "marketplace.approve_service"
    MARKETPLACE_MODERATE_REQUEST = "marketplace.moderate_request"

    # Feed
    FEED_MODERATE = "feed.moderate"

    # Moderation panel
    MODERATION_VIEW_STATS = "moderation.view_stats"
    MODERATION_VIEW_AUDIT = "moderation.view_audit"


# Everything a moderator can do except managing accounts
_MODERATOR_PERMISSIONS = [
    Permissions.IDENTITY_VIEW_USER,
    Permissions.MARKETPLACE_APPROVE_SERVICE,
    Permissions.MARKETPLACE_MODERATE_REQUEST,
    Permissions.FEED_MODERATE,
    Permissions.MODERATION_VIEW_STATS,
    Permissions.MODERATION_VIEW_AUDIT,
]


# Static Role -> Permission Mapping
ROLE_PERMISSIONS: Dict[str, List[str]] = {
    UserRole.ADMIN: _MODERATOR_PERMISSIONS + [
        Permissions.IDENTITY_MANAGE_USER,
    ],
    UserRole.ASSISTANT_ADMIN: list(_MODERATOR_PERMISSIONS),
    UserRole.STUDENT: [],
    UserRole.MENTOR: [],
    UserRole.COMPANY: [],
}

def get_user_permissions(user: User) -> List[str]:
    """
    Returns a list of permission strings for the given user based on their role.
    """
    if not user or not user.is_active:
        return []

    return ROLE_PERMISSIONS.get(user.role, [])
