"""
Jobs API endpoints.

Job offers and applications.
"""
from typing import List, Optional
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.security import require_auth
from . import services
from .dtos import JobOfferIn, JobOfferOut, JobApplicationIn, JobApplicationOut

router = Router(tags=["Jobs"])


@router.get("", response=List[JobOfferOut])
def list_jobs(request: HttpRequest, type: Optional[str] = None, poster: Optional[UUID] = None):
    """
    List job offers newest first.

    Query Parameters:
    - type: internship, full_time, part_time, contract
    - poster: only offers posted by this user
    """
    return services.list_job_offers(job_type=type, poster_id=poster)


@router.post("", response=JobOfferOut)
def create_job(request: HttpRequest, payload: JobOfferIn):
    user = require_auth(request)
    try:
        return services.create_job_offer(user, payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.get("/applications", response=List[JobApplicationOut])
def my_applications(request: HttpRequest):
    """The caller's own applications."""
    user = require_auth(request)
    return services.list_user_applications(user.id)


@router.post("/applications/{application_id}/withdraw", response=JobApplicationOut)
def withdraw_application(request: HttpRequest, application_id: UUID):
    user = require_auth(request)
    try:
        application = services.withdraw_application(application_id, user)
    except ValueError as e:
        raise HttpError(400, str(e))

    if application is None:
        raise HttpError(404, "Application not found")
    return application


@router.get("/{job_id}", response=JobOfferOut)
def get_job(request: HttpRequest, job_id: UUID):
    job = services.get_job_offer(job_id)
    if not job:
        raise HttpError(404, "Job not found")
    return job


@router.post("/{job_id}/apply")
def apply_to_job(request: HttpRequest, job_id: UUID, payload: Optional[JobApplicationIn] = None):
    user = require_auth(request)
    cover_letter = payload.cover_letter if payload else None
    try:
        application = services.apply_to_job(job_id, user, cover_letter)
    except ValueError as e:
        raise HttpError(400, str(e))

    if application is None:
        raise HttpError(404, "Job not found")
    return {"message": "Application submitted successfully", "application_id": str(application.id)}


@router.post("/{job_id}/close", response=JobOfferOut)
def close_job(request: HttpRequest, job_id: UUID):
    user = require_auth(request)
    try:
        job = services.close_job_offer(job_id, user)
    except PermissionError as e:
        raise HttpError(403, str(e))
    except ValueError as e:
        raise HttpError(400, str(e))

    if job is None:
        raise HttpError(404, "Job not found")
    return job


@router.get("/{job_id}/applications", response=List[JobApplicationOut])
def job_applications(request: HttpRequest, job_id: UUID):
    """Applications received for an offer. Poster only."""
    user = require_auth(request)
    try:
        applications = services.list_job_applications(job_id, user)
    except PermissionError as e:
        raise HttpError(403, str(e))

    if applications is None:
        raise HttpError(404, "Job not found")
    return applications
