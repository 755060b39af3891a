"""
Feed API endpoints.

Announcements with likes and comments.
"""
from typing import List, Optional
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.security import require_auth
from apps.moderation.audit_service import log_action, AuditAction
from . import services
from .dtos import AnnouncementIn, AnnouncementOut, CommentIn, CommentOut, LikeOut

router = Router(tags=["Feed"])


@router.get("", response=List[AnnouncementOut])
def list_announcements(request: HttpRequest, type: Optional[str] = None):
    """
    List announcements newest first.

    Query Parameters:
    - type: general, project, job, service
    """
    return services.list_announcements(announcement_type=type)


@router.post("", response=AnnouncementOut)
def create_announcement(request: HttpRequest, payload: AnnouncementIn):
    user = require_auth(request)
    try:
        return services.create_announcement(user, payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.get("/{announcement_id}", response=AnnouncementOut)
def get_announcement(request: HttpRequest, announcement_id: UUID):
    announcement = services.get_announcement(announcement_id)
    if not announcement:
        raise HttpError(404, "Announcement not found")
    return announcement


@router.delete("/{announcement_id}")
def delete_announcement(request: HttpRequest, announcement_id: UUID):
    user = require_auth(request)
    try:
        announcement = services.delete_announcement(announcement_id, user)
    except PermissionError as e:
        raise HttpError(403, str(e))

    if announcement is None:
        raise HttpError(404, "Announcement not found")

    if announcement.author_id != user.id:
        log_action(
            action=AuditAction.DELETE_ANNOUNCEMENT,
            target_type="Announcement",
            target_id=announcement_id,
            target_label=str(announcement),
            performed_by=user,
            context={"author_id": str(announcement.author_id)},
        )
    return {"message": "Announcement deleted"}


@router.post("/{announcement_id}/like", response=LikeOut)
def like_announcement(request: HttpRequest, announcement_id: UUID):
    user = require_auth(request)
    result = services.like_announcement(announcement_id, user)
    if result is None:
        raise HttpError(404, "Announcement not found")
    _, likes = result
    return {"liked": True, "likes": likes}


@router.delete("/{announcement_id}/like", response=LikeOut)
def unlike_announcement(request: HttpRequest, announcement_id: UUID):
    user = require_auth(request)
    result = services.unlike_announcement(announcement_id, user)
    if result is None:
        raise HttpError(404, "Announcement not found")
    _, likes = result
    return {"liked": False, "likes": likes}


@router.get("/{announcement_id}/comments", response=List[CommentOut])
def list_comments(request: HttpRequest, announcement_id: UUID):
    return services.list_comments(announcement_id)


@router.post("/{announcement_id}/comments", response=CommentOut)
def add_comment(request: HttpRequest, announcement_id: UUID, payload: CommentIn):
    user = require_auth(request)
    try:
        comment = services.add_comment(announcement_id, user, payload.content)
    except ValueError as e:
        raise HttpError(400, str(e))

    if comment is None:
        raise HttpError(404, "Announcement not found")
    return comment
