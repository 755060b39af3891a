"""API schemas for the Marketplace app."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from ninja import Field, Schema


class ServiceIn(Schema):
    title: str = Field(..., max_length=255)
    description: str
    category: str = Field(..., max_length=100)
    price: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    image_url: Optional[str] = None


class ServiceOut(Schema):
    id: UUID
    title: str
    description: str
    category: str
    price: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    image_url: Optional[str] = None
    status: str
    provider_id: UUID
    created_at: datetime
    updated_at: datetime


class ServiceRequestIn(Schema):
    message: Optional[str] = None


class ServiceRequestOut(Schema):
    id: UUID
    service_id: UUID
    requester_id: UUID
    message: Optional[str] = None
    status: str
    requested_at: datetime
    approved_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
