import uuid
from typing import Optional

from pydantic import Field

from .base import APIModel, UTCDateTime


class ProjectCreate(APIModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=20)


class ProjectRead(APIModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    user_id: uuid.UUID
    created_at: UTCDateTime
    updated_at: UTCDateTime


class TagCreate(APIModel):
    name: str = Field(min_length=1, max_length=50)
    color: Optional[str] = Field(default=None, max_length=20)


class TagRead(APIModel):
    id: uuid.UUID
    name: str
    color: Optional[str] = None
    user_id: uuid.UUID
    created_at: UTCDateTime
