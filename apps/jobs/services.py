"""Services for the Jobs app."""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import IntegrityError, transaction

from .dtos import JobOfferIn
from .models import JobOffer, JobApplication, JobType, JobStatus, ApplicationStatus

logger = logging.getLogger(__name__)


def _clean_list(values: List[str]) -> List[str]:
    return [v.strip() for v in values if v and v.strip()]


def list_job_offers(job_type: Optional[str] = None, poster_id: Optional[UUID] = None) -> List[JobOffer]:
    queryset = JobOffer.objects.all()
    if job_type:
        queryset = queryset.filter(job_type=job_type)
    if poster_id:
        queryset = queryset.filter(poster_id=poster_id)
    return list(queryset.order_by('-created_at'))


def get_job_offer(job_id: UUID) -> Optional[JobOffer]:
    try:
        return JobOffer.objects.get(id=job_id)
    except JobOffer.DoesNotExist:
        return None


def create_job_offer(poster, payload: JobOfferIn) -> JobOffer:
    if payload.type not in JobType.values:
        raise ValueError(f"Invalid job type: {payload.type}")
    if payload.status not in JobStatus.values:
        raise ValueError(f"Invalid status: {payload.status}")

    return JobOffer.objects.create(
        poster=poster,
        title=payload.title,
        description=payload.description,
        company=payload.company,
        location=payload.location,
        job_type=payload.type,
        duration=payload.duration,
        salary=payload.salary,
        requirements=_clean_list(payload.requirements),
        benefits=_clean_list(payload.benefits),
        status=payload.status,
    )


def close_job_offer(job_id: UUID, user) -> Optional[JobOffer]:
    job = get_job_offer(job_id)
    if job is None:
        return None
    if job.poster_id != user.id:
        raise PermissionError("Only the poster can close this offer")
    if job.status == JobStatus.CLOSED:
        raise ValueError("Job offer is already closed")

    job.status = JobStatus.CLOSED
    job.save(update_fields=['status', 'updated_at'])
    return job


def apply_to_job(job_id: UUID, user, cover_letter: Optional[str] = None) -> Optional[JobApplication]:
    """
    Submit an application. Returns None if the job does not exist.
    """
    job = get_job_offer(job_id)
    if job is None:
        return None

    if job.status != JobStatus.ACTIVE:
        raise ValueError("This job offer is not accepting applications")
    if job.poster_id == user.id:
        raise ValueError("You cannot apply to your own job offer")

    try:
        with transaction.atomic():
            application = JobApplication.objects.create(
                job=job,
                user=user,
                cover_letter=cover_letter,
            )
    except IntegrityError:
        raise ValueError("You have already applied to this job")

    logger.info(f"User {user.id} applied to job {job_id}")
    return application


def list_user_applications(user_id: UUID) -> List[JobApplication]:
    return list(JobApplication.objects.filter(user_id=user_id).order_by('-applied_at'))


def list_job_applications(job_id: UUID, user) -> Optional[List[JobApplication]]:
    job = get_job_offer(job_id)
    if job is None:
        return None
    if job.poster_id != user.id:
        raise PermissionError("Only the poster can view applications")
    return list(job.applications.all())


def withdraw_application(application_id: UUID, user) -> Optional[JobApplication]:
    try:
        application = JobApplication.objects.get(id=application_id, user=user)
    except JobApplication.DoesNotExist:
        return None

    if application.status != ApplicationStatus.PENDING:
        raise ValueError(f"Cannot withdraw application with status '{application.status}'")

    application.status = ApplicationStatus.WITHDRAWN
    application.save(update_fields=['status'])
    return application
