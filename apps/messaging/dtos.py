"""API schemas for the Messaging app."""
from datetime import datetime
from uuid import UUID

from ninja import Schema


class MessageIn(Schema):
    receiver_id: UUID
    content: str


class MessageOut(Schema):
    id: UUID
    sender_id: UUID
    receiver_id: UUID
    content: str
    read: bool
    created_at: datetime


class UnreadCountOut(Schema):
    count: int
