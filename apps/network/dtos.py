"""API schemas for the Network app."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from ninja import Schema


class ConnectionIn(Schema):
    receiver_id: UUID


class ConnectionOut(Schema):
    id: UUID
    requester_id: UUID
    receiver_id: UUID
    status: str
    created_at: datetime
    accepted_at: Optional[datetime] = None
