import re
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from ..core.time_utils import to_naive_utc
from ..models.task import TaskStatus, TaskPriority
from .base import APIModel, UTCDateTime
from .project import ProjectRead, TagRead

MAX_TITLE_LENGTH = 255

# Date and time are both required; the offset is optional and defaults to UTC
ISO_DATETIME_PATTERN = re.compile(
    r'^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?([Zz]|[+-]\d{2}:\d{2})?$'
)


def _require_iso_string(value):
    # Pydantic would also read "1700000000" as a unix timestamp
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not ISO_DATETIME_PATTERN.match(value):
        raise ValueError("Must be an ISO 8601 datetime string")
    return value


class TaskCreate(APIModel):
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.todo
    due_date: Optional[datetime] = None
    project_id: Optional[uuid.UUID] = None
    tag_ids: Optional[List[uuid.UUID]] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date_shape(cls, value):
        return _require_iso_string(value)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TaskUpdate(APIModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None
    project_id: Optional[uuid.UUID] = None
    tag_ids: Optional[List[uuid.UUID]] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def check_due_date_shape(cls, value):
        return _require_iso_string(value)

    @field_validator("title", "priority", "status", "tag_ids", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        # Omit the field to leave it unchanged; null would break NOT NULL columns
        if value is None:
            raise ValueError("May not be null")
        return value

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TaskStatusUpdate(APIModel):
    status: TaskStatus


class TaskFilters(APIModel):
    """Equality filters and free-text search accepted by the task listing."""

    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    project_id: Optional[uuid.UUID] = None
    search: Optional[str] = None


class TaskTagRead(APIModel):
    task_id: uuid.UUID
    tag_id: uuid.UUID
    tag: TagRead


class TaskRead(APIModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    due_date: Optional[UTCDateTime] = None
    completed_at: Optional[UTCDateTime] = None
    user_id: uuid.UUID
    project_id: Optional[uuid.UUID] = None
    project: Optional[ProjectRead] = None
    tags: List[TaskTagRead] = []
    created_at: UTCDateTime
    updated_at: UTCDateTime
