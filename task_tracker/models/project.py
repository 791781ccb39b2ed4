from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import datetime
import uuid

from ..core.time_utils import utc_now


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100)
    description: Optional[str] = Field(default=None)
    color: Optional[str] = Field(default=None, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)
    updated_at: datetime = Field(default_factory=utc_now, nullable=False)

    tasks: List["Task"] = Relationship(back_populates="project")


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=50)
    color: Optional[str] = Field(default=None, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, nullable=False)

    task_links: List["TaskTag"] = Relationship(back_populates="tag")
