from __future__ import annotations

from datetime import datetime  # noqa: TCH003

from notekeeper.core.models.base import AppBaseModel

from .common import NamedCreate, NamedUpdate


class TagCreate(NamedCreate):
    color: str = "#10B981"


class TagUpdate(NamedUpdate):
    pass


class TagRead(AppBaseModel):
    """A tag as shown in the sidebar.

    Explicit tags carry their stored id; dynamic ones (only seen on notes)
    use their name as id and have ``dynamic`` set.
    """

    id: str
    name: str
    color: str
    note_count: int
    sort_order: int | None = None
    dynamic: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
