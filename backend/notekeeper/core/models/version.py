from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import uuid4

from pydantic import Field

from .base import AppBaseModel, utc_now
from .note import Note

# Fields whose change is worth a snapshot, in the order they name the trigger.
VERSIONED_FIELDS = ("content", "title", "tags", "folder", "notebook")


def change_trigger(before: Note, after: Note) -> str | None:
    """Name the first versioned field that differs, e.g. ``"content_change"``."""
    for field in VERSIONED_FIELDS:
        if getattr(before, field) != getattr(after, field):
            return f"{field}_change"
    return None


class NoteVersion(AppBaseModel):
    """Snapshot of a note taken just before it changed.

    ``number`` counts snapshots of one note and is unrelated to ``Note.version``.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    number: int = Field(ge=1)
    note_id: str
    user_id: str
    trigger: str
    created_at: datetime = Field(default_factory=utc_now)
    note: Note

    @property
    def size(self) -> int:
        return len(self.note.content)
