from __future__ import annotations

import json
import re
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any, Protocol

from notekeeper.core.errors import InvalidInputError, NotFoundError
from notekeeper.core.schemas.taxonomy import NoteTaxonomy, TagCount
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from notekeeper.core.repositories.note_repository import NoteRepository


logger = get_logger(__name__)

# 8-4-4-4-12 hex digits. Importers leave these behind as tag values.
UUID_TAG_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


class TaggedNote(Protocol):
    tags: Sequence[Any]
    deleted: bool


def is_uuid_tag(value: Any) -> bool:
    """Return True if ``value`` is a string in canonical UUID layout (whole string)."""
    return isinstance(value, str) and UUID_TAG_PATTERN.fullmatch(value) is not None


def tag_key(tag: Any) -> Hashable:
    """Key a tag is counted under.

    Hashable tags are their own key. Unhashable ones (tag objects such as
    ``{"id": ..., "name": ...}``) are keyed by their canonical JSON text, so
    equal objects share a key.
    """
    try:
        hash(tag)
    except TypeError:
        return json.dumps(tag, sort_keys=True, default=str)
    return tag


def compute_tags(notes: Iterable[TaggedNote] | None) -> dict[Any, int]:
    """Count visible tags across live notes.

    Trashed notes are ignored, a tag repeated on one note counts once, and
    UUID-shaped tags are dropped entirely. The returned dict keeps the order
    in which tags were first seen; every count is at least 1.
    """
    if notes is None:
        raise InvalidInputError("A note collection is required")

    counts: dict[Any, int] = {}
    for note in notes:
        if note.deleted:
            continue
        for key in dict.fromkeys(tag_key(tag) for tag in note.tags or ()):
            if is_uuid_tag(key):
                continue
            counts[key] = counts.get(key, 0) + 1
    return counts


def remove_tag(note: TaggedNote | None, tag_value: Any) -> list[Any]:
    """Return the note's tag list without any occurrence of ``tag_value``.

    The note itself is left untouched; persisting the list is up to the caller.
    """
    if note is None:
        raise NotFoundError("Note not found")
    return [tag for tag in note.tags if tag != tag_value]


async def build_user_note_taxonomy(*, user_id: str, repo: NoteRepository) -> NoteTaxonomy:
    """Load one snapshot of the user's notes and project their tags."""
    notes = await repo.list(user_id=user_id)
    counts = compute_tags(notes)
    logger.debug("Built taxonomy for user %s: %d tags from %d notes", user_id, len(counts), len(notes))
    return NoteTaxonomy(tags=[TagCount(name=name, count=count) for name, count in counts.items()])
