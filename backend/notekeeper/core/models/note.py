from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from uuid import uuid4

from pydantic import Field

from .base import TimestampedModel

DEFAULT_NOTE_TITLE = "Untitled Note"


class Note(TimestampedModel):
    """Note domain model.

    Tags are stored as the user supplied them. Duplicates and UUID-shaped
    entries left behind by importers are tolerated here and handled when the
    tag projection is computed.
    """

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique note identifier")
    user_id: str = Field(description="Owner of the note")

    title: str = Field(default=DEFAULT_NOTE_TITLE, description="Note title")
    content: str = Field(default="", description="Note body (markdown)")

    tags: list[str] = Field(default_factory=list, description="Tags for categorization")

    # Organization
    notebook: str | None = Field(default=None, description="Notebook id")
    folder: str | None = Field(default=None, description="Folder id")
    starred: bool = False
    archived: bool = False

    # Trash
    deleted: bool = False
    deleted_at: datetime | None = None

    version: int = Field(default=1, ge=1)
    restored_from_version: int | None = Field(default=None, description="Snapshot number of the last restore")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": str(uuid4()),
                    "user_id": "user-1",
                    "title": "Dentist Appointment",
                    "content": "Monday at 10:00. Bring the insurance card.",
                    "tags": ["health", "appointments"],
                    "notebook": None,
                    "folder": None,
                }
            ]
        }
    }
