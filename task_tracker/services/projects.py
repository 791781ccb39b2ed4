"""Owner-scoped projects and tags."""
import logging
import uuid
from typing import List, Optional, Sequence

from sqlalchemy import delete, update
from sqlmodel import Session, col, select

from ..core.errors import NotFoundError, ValidationError
from ..core.time_utils import utc_now
from ..models.project import Project, Tag
from ..models.task import Task, TaskTag
from ..schemas.project import ProjectCreate, TagCreate

logger = logging.getLogger(__name__)


# --- PROJECTS ---

def get_owned_project(session: Session, owner_id: uuid.UUID, project_id: uuid.UUID) -> Optional[Project]:
    statement = select(Project).where(Project.id == project_id, Project.user_id == owner_id)
    return session.exec(statement).first()


def list_projects(session: Session, owner_id: uuid.UUID) -> List[Project]:
    statement = select(Project).where(Project.user_id == owner_id).order_by(col(Project.name))
    return list(session.exec(statement).all())


def create_project(session: Session, owner_id: uuid.UUID, data: ProjectCreate) -> Project:
    project = Project(user_id=owner_id, **data.model_dump())
    session.add(project)
    session.commit()
    session.refresh(project)
    logger.info("User %s created project %s", owner_id, project.id)
    return project


def delete_project(session: Session, owner_id: uuid.UUID, project_id: uuid.UUID) -> None:
    if get_owned_project(session, owner_id, project_id) is None:
        raise NotFoundError("Project not found")

    # Tasks outlive their project; they just lose the grouping
    session.exec(
        update(Task)
        .where(Task.project_id == project_id, Task.user_id == owner_id)
        .values(project_id=None, updated_at=utc_now())
    )
    session.exec(delete(Project).where(Project.id == project_id, Project.user_id == owner_id))
    session.commit()
    logger.info("User %s deleted project %s", owner_id, project_id)


def ensure_project_owned(session: Session, owner_id: uuid.UUID, project_id: Optional[uuid.UUID]) -> None:
    if project_id is not None and get_owned_project(session, owner_id, project_id) is None:
        raise ValidationError("projectId: Project not found")


# --- TAGS ---

def get_owned_tag(session: Session, owner_id: uuid.UUID, tag_id: uuid.UUID) -> Optional[Tag]:
    statement = select(Tag).where(Tag.id == tag_id, Tag.user_id == owner_id)
    return session.exec(statement).first()


def list_tags(session: Session, owner_id: uuid.UUID) -> List[Tag]:
    statement = select(Tag).where(Tag.user_id == owner_id).order_by(col(Tag.name))
    return list(session.exec(statement).all())


def create_tag(session: Session, owner_id: uuid.UUID, data: TagCreate) -> Tag:
    tag = Tag(user_id=owner_id, **data.model_dump())
    session.add(tag)
    session.commit()
    session.refresh(tag)
    logger.info("User %s created tag %s", owner_id, tag.id)
    return tag


def delete_tag(session: Session, owner_id: uuid.UUID, tag_id: uuid.UUID) -> None:
    tag = get_owned_tag(session, owner_id, tag_id)
    if tag is None:
        raise NotFoundError("Tag not found")

    for link in session.exec(select(TaskTag).where(TaskTag.tag_id == tag.id)).all():
        session.delete(link)
    session.flush()
    session.exec(delete(Tag).where(Tag.id == tag_id, Tag.user_id == owner_id))
    session.commit()
    logger.info("User %s deleted tag %s", owner_id, tag_id)


def ensure_tags_owned(session: Session, owner_id: uuid.UUID, tag_ids: Sequence[uuid.UUID]) -> List[uuid.UUID]:
    """Return ``tag_ids`` de-duplicated, or fail if any is not the caller's."""
    unique_ids = list(dict.fromkeys(tag_ids))
    if not unique_ids:
        return []
    statement = select(Tag.id).where(col(Tag.id).in_(unique_ids), Tag.user_id == owner_id)
    found = set(session.exec(statement).all())
    if len(found) != len(unique_ids):
        raise ValidationError("tagIds: Tag not found")
    return unique_ids
