from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError

from notekeeper.core.repositories.collection_repository import CollectionRepository
from notekeeper.utils.logging import get_logger

from .storage import load_json, run_blocking, save_json, user_lock

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notekeeper.core.models.collection import CollectionEntity, CollectionKind

logger = get_logger(__name__)


class FileCollectionRepository(CollectionRepository):
    """Keeps all entities of one kind for a user in ``<root>/<user_id>/<kind>.json``."""

    def __init__(self, root: Path, kind: CollectionKind) -> None:
        self._root = Path(root)
        self.kind = kind

    async def list(self, user_id: str) -> Sequence[CollectionEntity]:
        def _read() -> list[CollectionEntity]:
            user_dir = self._root / user_id
            if not user_dir.is_dir():
                return []
            with user_lock(user_dir, exclusive=False):
                return self._load(user_id)

        return await run_blocking(_read)

    async def get(self, user_id: str, entity_id: str) -> CollectionEntity | None:
        for entity in await self.list(user_id):
            if entity.id == entity_id:
                return entity
        return None

    async def save(self, entity: CollectionEntity) -> CollectionEntity:
        def _upsert() -> CollectionEntity:
            with user_lock(self._root / entity.user_id, exclusive=True):
                entities = self._load(entity.user_id)
                for i, existing in enumerate(entities):
                    if existing.id == entity.id:
                        entities[i] = entity
                        break
                else:
                    entities.append(entity)
                self._store(entity.user_id, entities)
            return entity

        saved = await run_blocking(_upsert)
        logger.debug("Saved %s %s for user %s", self.kind.label.lower(), entity.id, entity.user_id)
        return saved

    async def save_all(self, user_id: str, entities: Sequence[CollectionEntity]) -> None:
        def _replace() -> None:
            with user_lock(self._root / user_id, exclusive=True):
                self._store(user_id, list(entities))

        await run_blocking(_replace)

    async def delete(self, user_id: str, entity_id: str) -> bool:
        def _remove() -> bool:
            user_dir = self._root / user_id
            if not user_dir.is_dir():
                return False
            with user_lock(user_dir, exclusive=True):
                entities = self._load(user_id)
                remaining = [e for e in entities if e.id != entity_id]
                if len(remaining) == len(entities):
                    return False
                self._store(user_id, remaining)
                return True

        return await run_blocking(_remove)

    def _path(self, user_id: str) -> Path:
        return self._root / user_id / f"{self.kind.value}.json"

    def _load(self, user_id: str) -> list[CollectionEntity]:
        path = self._path(user_id)
        if not path.is_file():
            return []
        try:
            rows = load_json(path)
        except ValueError as err:
            logger.warning("Unreadable %s file %s: %s", self.kind.value, path, err)
            return []
        model = self.kind.model
        entities: list[CollectionEntity] = []
        for row in rows if isinstance(rows, list) else []:
            try:
                entities.append(model.model_validate(row))
            except ValidationError as err:
                logger.warning("Skipping invalid %s entry in %s: %s", self.kind.label.lower(), path, err)
        entities.sort(key=lambda e: e.sort_order)
        return entities

    def _store(self, user_id: str, entities: list[CollectionEntity]) -> None:
        save_json(self._path(user_id), [e.model_dump(mode="json") for e in entities])
