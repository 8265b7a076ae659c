from __future__ import annotations

from enum import Enum

from pydantic import Field

from notekeeper.core.models.base import AppBaseModel
from notekeeper.core.models.note import Note  # noqa: TCH001


class NoteSortField(str, Enum):
    TITLE = "title"
    CREATED = "created"
    UPDATED = "updated"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NoteSearchRequest(AppBaseModel):
    """Filters, ordering and paging for a note search. Trashed notes never match."""

    query: str | None = Field(default=None, description="Case-insensitive title substring")
    tag: str | None = None
    notebook: str | None = None
    folder: str | None = None
    sort_by: NoteSortField = NoteSortField.UPDATED
    sort_order: SortDirection = SortDirection.DESC
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=50, ge=1, le=500)


class NoteSearchPage(AppBaseModel):
    notes: list[Note]
    total: int
    offset: int
    limit: int
