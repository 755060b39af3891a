"""API schemas for the Feed app."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from ninja import Field, Schema


class AnnouncementIn(Schema):
    title: Optional[str] = Field(None, max_length=255)
    content: str
    type: str = "general"
    image_url: Optional[str] = None


class AnnouncementOut(Schema):
    id: UUID
    title: Optional[str] = None
    content: str
    type: str
    image_url: Optional[str] = None
    likes: int
    comments_count: int
    author_id: UUID
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_type(obj):
        return obj.announcement_type


class CommentIn(Schema):
    content: str


class CommentOut(Schema):
    id: UUID
    announcement_id: UUID
    user_id: UUID
    content: str
    created_at: datetime


class LikeOut(Schema):
    liked: bool
    likes: int
