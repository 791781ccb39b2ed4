"""
Task operations on behalf of an authenticated caller.

The caller id always comes from the auth guard, never from the request
body. A task that exists but belongs to someone else is reported exactly
like a task that does not exist.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session

from ..core.errors import NotFoundError
from ..core.time_utils import utc_now
from ..models.task import Task, TaskStatus
from ..schemas.task import TaskCreate, TaskFilters, TaskUpdate
from . import projects, task_store

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


def completed_at_for(status: TaskStatus) -> Optional[datetime]:
    """completed_at to store alongside a status write."""
    return utc_now() if status == TaskStatus.completed else None


def _get_owned_or_404(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID) -> Task:
    task = task_store.get_owned_task(session, owner_id, task_id)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND)
    return task


def list_tasks(session: Session, owner_id: uuid.UUID, filters: TaskFilters) -> List[Task]:
    return task_store.list_owned_tasks(session, owner_id, filters)


def get_task(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID) -> Task:
    return _get_owned_or_404(session, owner_id, task_id)


def create_task(session: Session, owner_id: uuid.UUID, data: TaskCreate) -> Task:
    projects.ensure_project_owned(session, owner_id, data.project_id)
    tag_ids = projects.ensure_tags_owned(session, owner_id, data.tag_ids or [])

    now = utc_now()
    db_task = Task(
        user_id=owner_id,
        title=data.title,
        description=data.description,
        status=data.status,
        priority=data.priority,
        due_date=data.due_date,
        project_id=data.project_id,
        completed_at=completed_at_for(data.status),
        created_at=now,
        updated_at=now,
    )
    task_store.insert_task(session, db_task, tag_ids)
    session.commit()
    logger.info("User %s created task %s", owner_id, db_task.id)
    return _get_owned_or_404(session, owner_id, db_task.id)


def update_task(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID, data: TaskUpdate) -> Task:
    task = _get_owned_or_404(session, owner_id, task_id)

    values = data.model_dump(exclude_unset=True, exclude={"tag_ids"})
    if "project_id" in values:
        projects.ensure_project_owned(session, owner_id, values["project_id"])
    tag_ids = None
    if "tag_ids" in data.model_fields_set:
        tag_ids = projects.ensure_tags_owned(session, owner_id, data.tag_ids)

    if "status" in values:
        values["completed_at"] = completed_at_for(values["status"])
    values["updated_at"] = utc_now()

    task_store.update_owned_task(session, owner_id, task_id, values)
    if tag_ids is not None:
        task_store.replace_task_tags(session, task, tag_ids)
    session.commit()
    logger.debug("User %s updated task %s: %s", owner_id, task_id, sorted(values))
    return _get_owned_or_404(session, owner_id, task_id)


def delete_task(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID) -> None:
    task = _get_owned_or_404(session, owner_id, task_id)
    task_store.delete_owned_task(session, owner_id, task)
    session.commit()
    logger.info("User %s deleted task %s", owner_id, task_id)


def set_status(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID, status: TaskStatus) -> Task:
    _get_owned_or_404(session, owner_id, task_id)
    task_store.update_owned_task(
        session,
        owner_id,
        task_id,
        {"status": status, "completed_at": completed_at_for(status), "updated_at": utc_now()},
    )
    session.commit()
    logger.debug("User %s moved task %s to %s", owner_id, task_id, status.value)
    return _get_owned_or_404(session, owner_id, task_id)
