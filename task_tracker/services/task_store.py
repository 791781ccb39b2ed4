"""
Task persistence, always scoped to an owning user.

Every query or mutation of task rows filters on ``Task.user_id``. Tag links
are only touched through a task that was loaded that way.
"""
import uuid
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, update
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, or_, select

from ..models.task import Task, TaskTag
from ..schemas.task import TaskFilters


def owned_tasks(owner_id: uuid.UUID):
    return (
        select(Task)
        .where(Task.user_id == owner_id)
        .options(
            selectinload(Task.project),
            selectinload(Task.tags).selectinload(TaskTag.tag),
        )
    )


def get_owned_task(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID) -> Optional[Task]:
    statement = owned_tasks(owner_id).where(Task.id == task_id)
    return session.exec(statement).first()


def list_owned_tasks(session: Session, owner_id: uuid.UUID, filters: TaskFilters) -> List[Task]:
    query = owned_tasks(owner_id)
    if filters.status is not None:
        query = query.where(Task.status == filters.status)
    if filters.priority is not None:
        query = query.where(Task.priority == filters.priority)
    if filters.project_id is not None:
        query = query.where(Task.project_id == filters.project_id)
    if filters.search:
        query = query.where(
            or_(
                col(Task.title).icontains(filters.search, autoescape=True),
                col(Task.description).icontains(filters.search, autoescape=True),
            )
        )
    # Newest first so the list is stable
    return list(session.exec(query.order_by(col(Task.created_at).desc())).all())


def insert_task(session: Session, task: Task, tag_ids: Iterable[uuid.UUID] = ()) -> None:
    session.add(task)
    session.flush()
    for tag_id in tag_ids:
        session.add(TaskTag(task_id=task.id, tag_id=tag_id))


def update_owned_task(session: Session, owner_id: uuid.UUID, task_id: uuid.UUID, values: Dict[str, Any]) -> int:
    statement = (
        update(Task)
        .where(Task.id == task_id, Task.user_id == owner_id)
        .values(**values)
    )
    return session.exec(statement).rowcount


def replace_task_tags(session: Session, task: Task, tag_ids: Iterable[uuid.UUID]) -> None:
    """Swap the tag links of a task that was loaded through an owner-scoped query."""
    for link in list(task.tags):
        session.delete(link)
    session.flush()
    for tag_id in tag_ids:
        session.add(TaskTag(task_id=task.id, tag_id=tag_id))


def delete_owned_task(session: Session, owner_id: uuid.UUID, task: Task) -> int:
    for link in list(task.tags):
        session.delete(link)
    session.flush()
    statement = delete(Task).where(Task.id == task.id, Task.user_id == owner_id)
    return session.exec(statement).rowcount
