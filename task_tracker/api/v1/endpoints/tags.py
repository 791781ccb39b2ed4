from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session
from typing import List
import uuid

from task_tracker.db.session import get_session
from task_tracker.schemas.project import TagCreate, TagRead
from task_tracker.services import projects as project_service
from task_tracker.api.deps import get_current_user_id

router = APIRouter()


@router.get("", response_model=List[TagRead])
def list_user_tags(
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return project_service.list_tags(session, user_id)


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
def create_tag(
    tag_create: TagCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return project_service.create_tag(session, user_id, tag_create)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tag(
    tag_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    project_service.delete_tag(session, user_id, tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
