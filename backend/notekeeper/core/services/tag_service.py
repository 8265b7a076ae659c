from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

from notekeeper.core.errors import InvalidInputError, NotFoundError
from notekeeper.core.models.base import utc_now
from notekeeper.core.models.collection import TagEntity
from notekeeper.core.services.collection_service import reorder_entities
from notekeeper.core.services.taxonomy_service import (
    build_user_note_taxonomy,
    is_uuid_tag,
    remove_tag,
)
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from notekeeper.api.v1.schemas.tag import TagCreate, TagUpdate
    from notekeeper.core.repositories.collection_repository import CollectionRepository
    from notekeeper.core.repositories.note_repository import NoteRepository
    from notekeeper.core.schemas.reorder import ReorderRequest
    from notekeeper.core.schemas.taxonomy import NoteTaxonomy

logger = get_logger(__name__)

# Colors handed to tags that only exist on notes.
DYNAMIC_TAG_PALETTE = (
    "#EF4444",
    "#F59E0B",
    "#10B981",
    "#3B82F6",
    "#6366F1",
    "#8B5CF6",
    "#EC4899",
    "#14B8A6",
)


def dynamic_tag_color(name: str) -> str:
    digest = hashlib.sha1(name.encode("utf-8")).digest()
    return DYNAMIC_TAG_PALETTE[digest[0] % len(DYNAMIC_TAG_PALETTE)]


class TagService:
    """Explicit tag entities merged with the tag projection of the user's notes."""

    def __init__(self, note_repo: NoteRepository, tag_repo: CollectionRepository) -> None:
        self._note_repo = note_repo
        self._tag_repo = tag_repo

    async def tag_counts(self, user_id: str) -> NoteTaxonomy:
        return await build_user_note_taxonomy(user_id=user_id, repo=self._note_repo)

    async def list_tags(self, user_id: str) -> list[dict]:
        """Explicit tags first (in sort order), then note-only tags, sorted by usage.

        The sort is stable, so ties keep that order.
        """
        counts = (await self.tag_counts(user_id)).as_dict()
        explicit = [t for t in await self._tag_repo.list(user_id) if not is_uuid_tag(t.name)]

        merged: dict[str, dict] = {}
        for tag in explicit:
            if tag.name in merged:
                continue
            merged[tag.name] = {
                **tag.model_dump(exclude={"user_id"}),
                "note_count": counts.get(tag.name, 0),
                "dynamic": False,
            }
        for name, count in counts.items():
            if name in merged:
                continue
            merged[name] = {
                "id": name,
                "name": name,
                "color": dynamic_tag_color(name),
                "note_count": count,
                "dynamic": True,
            }
        return sorted(merged.values(), key=lambda t: t["note_count"], reverse=True)

    async def get_tag(self, user_id: str, tag_id: str) -> TagEntity:
        tag = await self._tag_repo.get(user_id, tag_id)
        if tag is None:
            raise NotFoundError("Tag not found")
        return tag

    async def create_tag(self, user_id: str, payload: TagCreate) -> TagEntity:
        existing = await self._tag_repo.list(user_id)
        self._check_name(payload.name, existing)
        tag = TagEntity(
            user_id=user_id,
            name=payload.name,
            color=payload.color,
            sort_order=max((t.sort_order for t in existing), default=-1) + 1,
        )
        saved = await self._tag_repo.save(tag)
        logger.info("Created tag %r for user %s", saved.name, user_id)
        return saved

    async def update_tag(self, user_id: str, tag_id: str, payload: TagUpdate) -> TagEntity:
        tag = await self.get_tag(user_id, tag_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes and changes["name"] != tag.name:
            others = [t for t in await self._tag_repo.list(user_id) if t.id != tag_id]
            self._check_name(changes["name"], others)
        updated = tag.model_copy(update={**changes, "updated_at": utc_now()})
        return await self._tag_repo.save(updated)

    async def delete_tag(self, user_id: str, tag_id: str) -> None:
        """Delete the explicit entity. Notes keep the tag string."""
        if not await self._tag_repo.delete(user_id, tag_id):
            raise NotFoundError("Tag not found")

    async def reorder_tags(self, user_id: str, request: ReorderRequest) -> list[TagEntity]:
        tags = await self._tag_repo.list(user_id)
        try:
            reordered = reorder_entities(tags, request)
        except NotFoundError as err:
            raise NotFoundError("One or both tags not found") from err
        await self._tag_repo.save_all(user_id, reordered)
        return reordered

    async def remove_tag_from_note(self, user_id: str, note_id: str, tag_value: str) -> list[str]:
        """Strip every occurrence of ``tag_value`` from one note and persist the new list.

        The removal is applied to the note as stored at write time, so tags
        added concurrently survive.
        """

        def _strip(current):
            tags = remove_tag(current, tag_value)
            if tags == current.tags:
                return None
            return {"tags": tags, "version": current.version + 1, "updated_at": utc_now()}

        updated = await self._note_repo.modify(user_id, note_id, _strip)
        if updated is None:
            raise NotFoundError(f"Note {note_id} not found")
        logger.info("Removed tag %r from note %s for user %s", tag_value, note_id, user_id)
        return updated.tags

    @staticmethod
    def _check_name(name: str, existing: list[TagEntity]) -> None:
        if is_uuid_tag(name):
            raise InvalidInputError("Tag names shaped like a UUID are reserved for imported identifiers")
        if any(t.name == name for t in existing):
            raise InvalidInputError(f"Tag {name!r} already exists")
