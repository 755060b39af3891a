"""Services for the Feed app."""
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from django.db import transaction
from django.db.models import F

from apps.identity.permissions import Permissions, get_user_permissions
from .dtos import AnnouncementIn
from .models import Announcement, AnnouncementLike, AnnouncementType, Comment

logger = logging.getLogger(__name__)


def list_announcements(announcement_type: Optional[str] = None) -> List[Announcement]:
    queryset = Announcement.objects.all()
    if announcement_type:
        queryset = queryset.filter(announcement_type=announcement_type)
    return list(queryset.order_by('-created_at'))


def get_announcement(announcement_id: UUID) -> Optional[Announcement]:
    try:
        return Announcement.objects.get(id=announcement_id)
    except Announcement.DoesNotExist:
        return None


def create_announcement(author, payload: AnnouncementIn) -> Announcement:
    if payload.type not in AnnouncementType.values:
        raise ValueError(f"Invalid announcement type: {payload.type}")
    if not payload.content.strip():
        raise ValueError("Content cannot be empty")

    return Announcement.objects.create(
        author=author,
        title=payload.title,
        content=payload.content,
        announcement_type=payload.type,
        image_url=payload.image_url,
    )


def delete_announcement(announcement_id: UUID, user) -> Optional[Announcement]:
    """
    Delete an announcement with its likes and comments.

    Allowed for the author and for feed moderators.
    """
    announcement = get_announcement(announcement_id)
    if announcement is None:
        return None

    if announcement.author_id != user.id and Permissions.FEED_MODERATE not in get_user_permissions(user):
        raise PermissionError("Only the author can delete this announcement")

    announcement.delete()
    logger.info(f"Announcement {announcement_id} deleted by {user.id}")
    return announcement


# =============================================================================
# Likes
# =============================================================================

def like_announcement(announcement_id: UUID, user) -> Optional[Tuple[bool, int]]:
    """
    Like an announcement. A second like by the same user is a no-op.

    Returns (created, likes) or None if the announcement does not exist.
    """
    with transaction.atomic():
        try:
            announcement = Announcement.objects.select_for_update().get(id=announcement_id)
        except Announcement.DoesNotExist:
            return None

        _, created = AnnouncementLike.objects.get_or_create(announcement=announcement, user=user)
        if created:
            Announcement.objects.filter(id=announcement.id).update(likes=F('likes') + 1)

    announcement.refresh_from_db(fields=['likes'])
    return created, announcement.likes


def unlike_announcement(announcement_id: UUID, user) -> Optional[Tuple[bool, int]]:
    """
    Remove the user's like. The counter only moves if a like was removed.
    """
    with transaction.atomic():
        try:
            announcement = Announcement.objects.select_for_update().get(id=announcement_id)
        except Announcement.DoesNotExist:
            return None

        deleted, _ = AnnouncementLike.objects.filter(announcement=announcement, user=user).delete()
        if deleted:
            Announcement.objects.filter(id=announcement.id, likes__gt=0).update(likes=F('likes') - 1)

    announcement.refresh_from_db(fields=['likes'])
    return bool(deleted), announcement.likes


# =============================================================================
# Comments
# =============================================================================

def list_comments(announcement_id: UUID) -> List[Comment]:
    return list(Comment.objects.filter(announcement_id=announcement_id).order_by('-created_at'))


def add_comment(announcement_id: UUID, user, content: str) -> Optional[Comment]:
    content = (content or "").strip()
    if not content:
        raise ValueError("Comment cannot be empty")

    with transaction.atomic():
        try:
            announcement = Announcement.objects.select_for_update().get(id=announcement_id)
        except Announcement.DoesNotExist:
            return None

        comment = Comment.objects.create(announcement=announcement, user=user, content=content)
        Announcement.objects.filter(id=announcement.id).update(comments_count=F('comments_count') + 1)

    return comment
