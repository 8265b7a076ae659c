from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from notekeeper.core.models.note import Note
    from notekeeper.core.models.version import NoteVersion


class NoteRepository(ABC):
    """Abstract repository interface for notes.

    Contract used by services and dependency injection. Implementations
    perform I/O and therefore expose async methods. Every call returns fresh
    model instances, so callers may hold the result as a snapshot.
    """

    @abstractmethod
    async def create(self, note: Note) -> Note:  # pragma: no cover - interface only
        """Persist a new note and return the stored entity."""

    @abstractmethod
    async def get(self, user_id: str, note_id: str) -> Note | None:  # pragma: no cover
        """Fetch a note by id or return None if not found."""

    @abstractmethod
    async def list(self, *, user_id: str) -> Sequence[Note]:  # pragma: no cover
        """Return every note of the user, trashed ones included.

        The result is one consistent snapshot of the store.
        """

    @abstractmethod
    async def modify(
        self,
        user_id: str,
        note_id: str,
        mutate: Callable[[Note], dict[str, Any] | None],
        *,
        trigger: str | None = None,
    ) -> Note | None:  # pragma: no cover
        """Atomically read, change and store a note.

        ``mutate`` is called with the current note and no other write can
        land in between. Before a change to title, content, tags, notebook or
        folder is stored, the previous state is kept as a NoteVersion; an
        explicit ``trigger`` forces that snapshot and names it. Returns the
        stored note (unchanged when ``mutate`` returns nothing), or None if
        the note does not exist.
        """

    async def update_fields(self, user_id: str, note_id: str, changes: dict[str, Any]) -> Note | None:
        """Partially update fields on a note and return the updated entity, or None if missing."""
        return await self.modify(user_id, note_id, lambda _current: changes)

    @abstractmethod
    async def delete(self, user_id: str, note_id: str) -> bool:  # pragma: no cover
        """Remove a note and its history permanently. Return True if it existed."""

    @abstractmethod
    async def list_versions(self, user_id: str, note_id: str) -> Sequence[NoteVersion]:  # pragma: no cover
        """Return the note's snapshots, newest first."""

    @abstractmethod
    async def get_version(
        self, user_id: str, note_id: str, version_id: str
    ) -> NoteVersion | None:  # pragma: no cover
        """Fetch one snapshot by id or return None if not found."""

    @abstractmethod
    async def delete_version(self, user_id: str, note_id: str, version_id: str) -> bool:  # pragma: no cover
        """Remove one snapshot. Return True if it existed."""
