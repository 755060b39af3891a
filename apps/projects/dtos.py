"""API schemas for the Projects app."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Field, Schema


class ProjectIn(Schema):
    title: str = Field(..., max_length=255)
    description: str
    category: str = Field(..., max_length=100)
    status: str = "active"
    skills: List[str] = []
    max_participants: int = 10
    image_url: Optional[str] = None


class ProjectOut(Schema):
    id: UUID
    title: str
    description: str
    category: str
    status: str
    skills: List[str]
    max_participants: int
    current_participants: int
    image_url: Optional[str] = None
    creator_id: UUID
    created_at: datetime
    updated_at: datetime


class ParticipantOut(Schema):
    id: UUID
    project_id: UUID
    user_id: UUID
    status: str
    joined_at: datetime


class ParticipantDecisionIn(Schema):
    status: str
