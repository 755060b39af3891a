"""API schemas for the Jobs app."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from ninja import Field, Schema


class JobOfferIn(Schema):
    title: str = Field(..., max_length=255)
    description: str
    company: str = Field(..., max_length=255)
    location: str = Field(..., max_length=255)
    type: str
    duration: Optional[str] = None
    salary: Optional[str] = None
    requirements: List[str] = []
    benefits: List[str] = []
    status: str = "active"


class JobOfferOut(Schema):
    id: UUID
    title: str
    description: str
    company: str
    location: str
    type: str
    duration: Optional[str] = None
    salary: Optional[str] = None
    requirements: List[str]
    benefits: List[str]
    status: str
    poster_id: UUID
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def resolve_type(obj):
        return obj.job_type


class JobApplicationIn(Schema):
    cover_letter: Optional[str] = None


class JobApplicationOut(Schema):
    id: UUID
    job_id: UUID
    user_id: UUID
    status: str
    cover_letter: Optional[str] = None
    applied_at: datetime
