from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.core.models.collection import CollectionEntity, CollectionKind


class CollectionRepository(ABC):
    """Storage for one kind of user-defined entity (tags, notebooks, folders)."""

    kind: CollectionKind

    @abstractmethod
    async def list(self, user_id: str) -> Sequence[CollectionEntity]:  # pragma: no cover
        """Return the user's entities ordered by sort_order."""

    @abstractmethod
    async def get(self, user_id: str, entity_id: str) -> CollectionEntity | None:  # pragma: no cover
        """Fetch one entity or return None."""

    @abstractmethod
    async def save(self, entity: CollectionEntity) -> CollectionEntity:  # pragma: no cover
        """Insert or replace an entity by id."""

    @abstractmethod
    async def save_all(self, user_id: str, entities: Sequence[CollectionEntity]) -> None:  # pragma: no cover
        """Replace the user's whole collection in one write."""

    @abstractmethod
    async def delete(self, user_id: str, entity_id: str) -> bool:  # pragma: no cover
        """Delete an entity. Return True if it existed."""
