from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from pydantic import Field, field_validator

from notekeeper.core.models.base import AppBaseModel
from notekeeper.core.models.note import DEFAULT_NOTE_TITLE
from notekeeper.utils.validation import normalize_tags


class NoteCreate(AppBaseModel):
    title: str = Field(default=DEFAULT_NOTE_TITLE, max_length=255, description="Note title")
    content: str = Field(default="", description="Note body (markdown)")
    tags: list[str] = Field(default_factory=list, description="Tags for categorization")
    notebook: str | None = None
    folder: str | None = None
    starred: bool = False
    archived: bool = False

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        return normalize_tags(v)

    @field_validator("title")
    @classmethod
    def default_blank_title(cls, v: str) -> str:
        return v.strip() or DEFAULT_NOTE_TITLE


class NoteUpdate(AppBaseModel):
    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    tags: list[str] | None = None
    notebook: str | None = None
    folder: str | None = None
    starred: bool | None = None
    archived: bool | None = None

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        return normalize_tags(v)

    @field_validator("title")
    @classmethod
    def reject_blank_title(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be blank")
        return v.strip() if v is not None else v


class NoteRead(AppBaseModel):
    id: str
    user_id: str
    title: str
    content: str
    tags: list[str]
    notebook: str | None
    folder: str | None
    starred: bool
    archived: bool
    deleted: bool
    deleted_at: datetime | None
    version: int
    restored_from_version: int | None = None
    created_at: datetime
    updated_at: datetime | None


class NoteVersionSummary(AppBaseModel):
    """History entry without the note body."""

    id: str
    number: int
    trigger: str
    created_at: datetime
    size: int


class NoteVersionRead(NoteVersionSummary):
    note: NoteRead


class NoteSearchResponse(AppBaseModel):
    notes: list[NoteRead]
    total: int
    offset: int
    limit: int


class TagRemoveRequest(AppBaseModel):
    tag: str = Field(description="Exact tag value to strip from the note")


class NoteTagsRead(AppBaseModel):
    note_id: str
    tags: list[str]
