from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from typing import List
import uuid

from task_tracker.db.session import get_session
from task_tracker.schemas.project import ProjectCreate, ProjectRead
from task_tracker.services import projects as project_service
from task_tracker.api.deps import get_current_user_id

router = APIRouter()


@router.get("", response_model=List[ProjectRead])
def list_user_projects(
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return project_service.list_projects(session, user_id)


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_project(
    project_create: ProjectCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return project_service.create_project(session, user_id, project_create)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    project_service.delete_project(session, user_id, project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
