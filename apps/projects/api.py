"""
Projects API endpoints.

Project listing, creation, search and joining.
"""
from typing import List, Optional
from uuid import UUID

from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from apps.identity.security import require_auth
from . import services
from .dtos import ProjectIn, ProjectOut, ParticipantOut, ParticipantDecisionIn

router = Router(tags=["Projects"])


@router.get("", response=List[ProjectOut])
def list_projects(request: HttpRequest, creator: Optional[UUID] = None):
    """
    List projects newest first, optionally only one creator's.
    """
    return services.list_projects(creator_id=creator)


@router.post("", response=ProjectOut)
def create_project(request: HttpRequest, payload: ProjectIn):
    """Create a project owned by the caller."""
    user = require_auth(request)
    try:
        return services.create_project(user, payload)
    except ValueError as e:
        raise HttpError(400, str(e))


@router.get("/search", response=List[ProjectOut])
def search_projects(request: HttpRequest, q: str = ""):
    return services.search_projects(q)


@router.get("/{project_id}", response=ProjectOut)
def get_project(request: HttpRequest, project_id: UUID):
    project = services.get_project(project_id)
    if not project:
        raise HttpError(404, "Project not found")
    return project


@router.post("/{project_id}/join")
def join_project(request: HttpRequest, project_id: UUID):
    """
    Join a project, taking one seat.
    """
    user = require_auth(request)
    try:
        participant = services.join_project(project_id, user)
    except ValueError as e:
        raise HttpError(400, str(e))

    if participant is None:
        raise HttpError(404, "Project not found")
    return {"message": "Successfully joined project", "participant_id": str(participant.id)}


@router.get("/{project_id}/participants", response=List[ParticipantOut])
def list_participants(request: HttpRequest, project_id: UUID):
    if not services.get_project(project_id):
        raise HttpError(404, "Project not found")
    return services.list_participants(project_id)


@router.patch("/{project_id}/participants/{participant_id}", response=ParticipantOut)
def decide_participant(request: HttpRequest, project_id: UUID, participant_id: UUID, payload: ParticipantDecisionIn):
    """
    Creator accepts or rejects a participant.
    """
    user = require_auth(request)
    try:
        participant = services.decide_participant(project_id, participant_id, user, payload.status)
    except PermissionError as e:
        raise HttpError(403, str(e))
    except ValueError as e:
        raise HttpError(400, str(e))

    if participant is None:
        raise HttpError(404, "Participant not found")
    return participant
