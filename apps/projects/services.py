"""Services for the Projects app."""
import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import F, Q

from .dtos import ProjectIn
from .models import Project, ProjectParticipant, ProjectStatus, ParticipantStatus

logger = logging.getLogger(__name__)


def list_projects(creator_id: Optional[UUID] = None) -> List[Project]:
    queryset = Project.objects.all()
    if creator_id:
        queryset = queryset.filter(creator_id=creator_id)
    return list(queryset.order_by('-created_at'))


def get_project(project_id: UUID) -> Optional[Project]:
    try:
        return Project.objects.get(id=project_id)
    except Project.DoesNotExist:
        return None


def create_project(creator, payload: ProjectIn) -> Project:
    if payload.status not in ProjectStatus.values:
        raise ValueError(f"Invalid status: {payload.status}")
    if payload.max_participants < 1:
        raise ValueError("max_participants must be at least 1")

    data = payload.dict()
    data['skills'] = [s.strip() for s in data['skills'] if s and s.strip()]
    return Project.objects.create(creator=creator, **data)


def search_projects(query: str) -> List[Project]:
    """
    Case-insensitive substring search on title, description and category.
    """
    query = (query or "").strip()
    if not query:
        return []

    return list(
        Project.objects.filter(
            Q(title__icontains=query) |
            Q(description__icontains=query) |
            Q(category__icontains=query)
        ).order_by('-created_at')
    )


def join_project(project_id: UUID, user) -> Optional[ProjectParticipant]:
    """
    Add the user as a participant and take a seat.

    Returns None if the project does not exist. Raises ValueError when the
    join is not allowed.
    """
    with transaction.atomic():
        try:
            project = Project.objects.select_for_update().get(id=project_id)
        except Project.DoesNotExist:
            return None

        if project.creator_id == user.id:
            raise ValueError("You cannot join your own project")
        if project.status != ProjectStatus.ACTIVE:
            raise ValueError(f"Cannot join a project with status '{project.status}'")
        if ProjectParticipant.objects.filter(project=project, user=user).exists():
            raise ValueError("You have already joined this project")
        if project.is_full:
            raise ValueError("This project is full")

        participant = ProjectParticipant.objects.create(project=project, user=user)
        Project.objects.filter(id=project.id).update(
            current_participants=F('current_participants') + 1
        )

    logger.info(f"User {user.id} joined project {project_id}")
    return participant


def list_participants(project_id: UUID) -> List[ProjectParticipant]:
    return list(ProjectParticipant.objects.filter(project_id=project_id))


def decide_participant(project_id: UUID, participant_id: UUID, user, status: str) -> Optional[ProjectParticipant]:
    """
    Project creator accepts or rejects a participant. Rejecting frees the seat.
    """
    if status not in (ParticipantStatus.ACCEPTED, ParticipantStatus.REJECTED):
        raise ValueError("Status must be 'accepted' or 'rejected'")

    with transaction.atomic():
        try:
            participant = (
                ProjectParticipant.objects.select_for_update()
                .select_related('project')
                .get(id=participant_id, project_id=project_id)
            )
        except ProjectParticipant.DoesNotExist:
            return None

        if participant.project.creator_id != user.id:
            raise PermissionError("Only the project creator can manage participants")
        if participant.status == ParticipantStatus.REJECTED:
            raise ValueError("Participant was already rejected")

        participant.status = status
        participant.save(update_fields=['status'])

        if status == ParticipantStatus.REJECTED:
            Project.objects.filter(id=project_id, current_participants__gt=0).update(
                current_participants=F('current_participants') - 1
            )

    return participant
