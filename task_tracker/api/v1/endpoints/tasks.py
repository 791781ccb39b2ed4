from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from typing import List, Optional
import uuid

from task_tracker.db.session import get_session
from task_tracker.models.task import TaskPriority, TaskStatus
from task_tracker.schemas.task import TaskCreate, TaskFilters, TaskRead, TaskStatusUpdate, TaskUpdate
from task_tracker.services import tasks as task_service
from task_tracker.api.deps import get_current_user_id

router = APIRouter()


def get_task_filters(
    status: Optional[TaskStatus] = Query(default=None),
    priority: Optional[TaskPriority] = Query(default=None),
    project_id: Optional[uuid.UUID] = Query(default=None, alias="projectId"),
    search: Optional[str] = Query(default=None, max_length=255),
) -> TaskFilters:
    # Only these known keys ever reach the query
    return TaskFilters(status=status, priority=priority, project_id=project_id, search=search or None)


@router.get("", response_model=List[TaskRead])
def list_user_tasks(
    filters: TaskFilters = Depends(get_task_filters),
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return task_service.list_tasks(session, user_id, filters)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return task_service.create_task(session, user_id, task_create)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return task_service.get_task(session, user_id, task_id)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: uuid.UUID,
    task_update: TaskUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return task_service.update_task(session, user_id, task_id, task_update)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    task_service.delete_task(session, user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/status", response_model=TaskRead)
def update_task_status(
    task_id: uuid.UUID,
    status_update: TaskStatusUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    return task_service.set_status(session, user_id, task_id, status_update.status)
