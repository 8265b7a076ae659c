from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field

from notekeeper.core.models.base import AppBaseModel

from .common import NamedCreate, NamedUpdate


class NotebookCreate(NamedCreate):
    description: str = Field(default="", max_length=1000)
    color: str = "#3B82F6"


class NotebookUpdate(NamedUpdate):
    description: str | None = Field(default=None, max_length=1000)


class NotebookRead(AppBaseModel):
    id: str
    name: str
    description: str
    color: str
    sort_order: int
    note_count: int
    created_at: datetime
    updated_at: datetime | None


class FolderCreate(NamedCreate):
    parent_id: str | None = None
    color: str = "#8B5CF6"


class FolderUpdate(NamedUpdate):
    parent_id: str | None = None


class FolderRead(AppBaseModel):
    id: str
    name: str
    parent_id: str | None
    color: str
    sort_order: int
    note_count: int
    created_at: datetime
    updated_at: datetime | None
