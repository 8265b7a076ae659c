from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from notekeeper.core.errors import InvalidInputError, NotFoundError
from notekeeper.core.models.base import utc_now
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.core.models.collection import CollectionEntity
    from notekeeper.core.repositories.collection_repository import CollectionRepository
    from notekeeper.core.repositories.note_repository import NoteRepository
    from notekeeper.core.schemas.reorder import ReorderRequest

logger = get_logger(__name__)


def reorder_entities(
    entities: Sequence[CollectionEntity], request: ReorderRequest
) -> list[CollectionEntity]:
    """Move the source entity next to the target and renumber sort_order from 0.

    Raises NotFoundError if either id is missing. Returns updated copies.
    """
    ordered = sorted(entities, key=lambda e: e.sort_order)
    ids = [e.id for e in ordered]
    if request.source_id not in ids or request.target_id not in ids:
        raise NotFoundError("One or both items not found")

    # Dropping an item onto itself only renumbers.
    if request.source_id != request.target_id:
        moved = ordered.pop(ids.index(request.source_id))
        target_index = [e.id for e in ordered].index(request.target_id)
        insert_at = target_index if request.position == "before" else target_index + 1
        ordered.insert(insert_at, moved)

    now = utc_now()
    result = []
    for index, entity in enumerate(ordered):
        if entity.sort_order != index:
            entity = entity.model_copy(update={"sort_order": index, "updated_at": now})
        result.append(entity)
    return result


class CollectionService:
    """CRUD and ordering for notebooks and folders.

    ``note_field`` is the Note attribute that references this collection;
    it is used to count live notes per entity.
    """

    note_field: str
    # Fields an update may explicitly set to null.
    nullable_fields: frozenset[str] = frozenset()

    def __init__(self, repo: CollectionRepository, note_repo: NoteRepository) -> None:
        self._repo = repo
        self._note_repo = note_repo

    @property
    def _label(self) -> str:
        return self._repo.kind.label

    async def list_with_counts(self, user_id: str) -> list[dict[str, Any]]:
        entities = await self._repo.list(user_id)
        notes = await self._note_repo.list(user_id=user_id)
        counts = Counter(getattr(n, self.note_field) for n in notes if not n.deleted)
        return [{**e.model_dump(exclude={"user_id"}), "note_count": counts.get(e.id, 0)} for e in entities]

    async def get(self, user_id: str, entity_id: str) -> CollectionEntity:
        entity = await self._repo.get(user_id, entity_id)
        if entity is None:
            raise NotFoundError(f"{self._label} not found")
        return entity

    async def create(self, user_id: str, payload: Any) -> CollectionEntity:
        existing = await self._repo.list(user_id)
        next_order = max((e.sort_order for e in existing), default=-1) + 1
        entity = self._repo.kind.model(user_id=user_id, sort_order=next_order, **payload.model_dump())
        saved = await self._repo.save(entity)
        logger.info("Created %s %s for user %s", self._label.lower(), saved.id, user_id)
        return saved

    async def update(self, user_id: str, entity_id: str, payload: Any) -> CollectionEntity:
        entity = await self.get(user_id, entity_id)
        changes = {
            k: v
            for k, v in payload.model_dump(exclude_unset=True).items()
            if v is not None or k in self.nullable_fields
        }
        updated = entity.model_validate({**entity.model_dump(), **changes, "updated_at": utc_now()})
        return await self._repo.save(updated)

    async def delete(self, user_id: str, entity_id: str) -> None:
        if not await self._repo.delete(user_id, entity_id):
            raise NotFoundError(f"{self._label} not found")
        logger.info("Deleted %s %s for user %s", self._label.lower(), entity_id, user_id)

    async def reorder(self, user_id: str, request: ReorderRequest) -> list[CollectionEntity]:
        entities = await self._repo.list(user_id)
        try:
            reordered = reorder_entities(entities, request)
        except NotFoundError as err:
            raise NotFoundError(f"One or both {self._repo.kind.value} not found") from err
        await self._repo.save_all(user_id, reordered)
        return reordered


class NotebookService(CollectionService):
    note_field = "notebook"


class FolderService(CollectionService):
    note_field = "folder"
    nullable_fields = frozenset({"parent_id"})

    async def create(self, user_id: str, payload: Any) -> CollectionEntity:
        if payload.parent_id is not None:
            await self._check_parent(user_id, None, payload.parent_id)
        return await super().create(user_id, payload)

    async def update(self, user_id: str, entity_id: str, payload: Any) -> CollectionEntity:
        if payload.parent_id is not None:
            await self._check_parent(user_id, entity_id, payload.parent_id)
        return await super().update(user_id, entity_id, payload)

    async def _check_parent(self, user_id: str, folder_id: str | None, parent_id: str) -> None:
        folders = {f.id: f for f in await self._repo.list(user_id)}
        if parent_id not in folders:
            raise InvalidInputError("Parent folder does not exist")
        # Walk up from the new parent; reaching folder_id would close a cycle.
        current: str | None = parent_id
        seen: set[str] = set()
        while current is not None and current not in seen:
            if current == folder_id:
                raise InvalidInputError("A folder cannot be nested inside itself")
            seen.add(current)
            current = folders[current].parent_id if current in folders else None
