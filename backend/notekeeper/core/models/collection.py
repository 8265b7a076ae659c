from __future__ import annotations

from enum import Enum
from uuid import uuid4

from pydantic import Field

from .base import TimestampedModel


class CollectionKind(str, Enum):
    """User-defined, ordered entities stored one file per user and kind."""

    TAG = "tags"
    NOTEBOOK = "notebooks"
    FOLDER = "folders"

    @property
    def model(self) -> type[CollectionEntity]:
        return _MODELS[self]

    @property
    def label(self) -> str:
        return self.value[:-1].capitalize()


class CollectionEntity(TimestampedModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    name: str
    color: str
    sort_order: int = 0


class TagEntity(CollectionEntity):
    """Explicitly created tag. Lives on even when no note references it."""

    color: str = "#10B981"


class Notebook(CollectionEntity):
    description: str = ""
    color: str = "#3B82F6"


class Folder(CollectionEntity):
    parent_id: str | None = None
    color: str = "#8B5CF6"


_MODELS: dict[CollectionKind, type[CollectionEntity]] = {
    CollectionKind.TAG: TagEntity,
    CollectionKind.NOTEBOOK: Notebook,
    CollectionKind.FOLDER: Folder,
}
