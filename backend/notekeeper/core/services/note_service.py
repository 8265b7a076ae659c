from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from notekeeper.core.errors import InvalidInputError, NotFoundError
from notekeeper.core.models.base import utc_now
from notekeeper.core.models.note import Note
from notekeeper.core.schemas.note_search import NoteSearchPage, NoteSortField, SortDirection
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from notekeeper.api.v1.schemas.note import NoteCreate, NoteUpdate
    from notekeeper.core.models.version import NoteVersion
    from notekeeper.core.repositories.note_repository import NoteRepository
    from notekeeper.core.schemas.note_search import NoteSearchRequest

logger = get_logger(__name__)


class NoteService:
    """Service for managing a user's notes, including the trash."""

    # A partial update may clear these by sending null.
    NULLABLE_FIELDS = frozenset({"notebook", "folder"})

    def __init__(self, repo: NoteRepository) -> None:
        self._repo = repo

    async def create_note(self, create_dto: NoteCreate, user_id: str) -> Note:
        now = utc_now()
        note = Note(
            user_id=user_id,
            title=create_dto.title,
            content=create_dto.content,
            tags=list(create_dto.tags),
            notebook=create_dto.notebook,
            folder=create_dto.folder,
            starred=create_dto.starred,
            archived=create_dto.archived,
            created_at=now,
            updated_at=now,
        )
        return await self._repo.create(note)

    async def get_note(self, note_id: str, user_id: str) -> Note:
        """Return the note or raise NotFoundError. Trashed notes are returned too."""
        note = await self._repo.get(user_id, note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    async def list_notes(
        self,
        user_id: str,
        *,
        deleted: bool = False,
        starred: bool = False,
        archived: bool = False,
        since: datetime | None = None,
        notebook: str | None = None,
        folder: str | None = None,
        tag: str | None = None,
    ) -> list[Note]:
        """List notes, most recently updated first.

        ``deleted=True`` is the trash view; every other view hides trashed
        notes. ``starred`` and ``archived`` narrow the result only when set.
        """
        notes = [n for n in await self._repo.list(user_id=user_id) if n.deleted == deleted]
        if starred:
            notes = [n for n in notes if n.starred]
        if archived:
            notes = [n for n in notes if n.archived]
        if since is not None:
            if since.tzinfo is None:
                since = since.replace(tzinfo=UTC)
            notes = [n for n in notes if n.last_modified > since]
        if notebook:
            notes = [n for n in notes if n.notebook == notebook]
        if folder:
            notes = [n for n in notes if n.folder == folder]
        if tag:
            notes = [n for n in notes if tag in n.tags]
        notes.sort(key=lambda n: n.last_modified, reverse=True)
        return notes

    async def update_note(self, note_id: str, update_dto: NoteUpdate, user_id: str) -> Note:
        changes = {
            k: v
            for k, v in update_dto.model_dump(exclude_unset=True).items()
            if v is not None or k in self.NULLABLE_FIELDS
        }
        updated = await self._repo.modify(
            user_id,
            note_id,
            lambda current: {**changes, "version": current.version + 1, "updated_at": utc_now()},
        )
        if updated is None:
            raise NotFoundError(f"Note {note_id} not found")
        return updated

    async def delete_note(self, note_id: str, user_id: str) -> Note:
        """Move a note to the trash."""
        await self.get_note(note_id, user_id)
        now = utc_now()
        note = await self._repo.update_fields(
            user_id, note_id, {"deleted": True, "deleted_at": now, "updated_at": now}
        )
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        logger.info("Moved note %s to trash for user %s", note_id, user_id)
        return note

    async def restore_note(self, note_id: str, user_id: str) -> Note:
        existing = await self.get_note(note_id, user_id)
        if not existing.deleted:
            raise InvalidInputError("Note is not in trash")
        note = await self._repo.update_fields(
            user_id, note_id, {"deleted": False, "deleted_at": None, "updated_at": utc_now()}
        )
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    async def purge_note(self, note_id: str, user_id: str) -> None:
        """Permanently delete a note that is already in the trash."""
        existing = await self.get_note(note_id, user_id)
        if not existing.deleted:
            raise InvalidInputError("Note must be in trash before permanent deletion")
        if not await self._repo.delete(user_id, note_id):
            raise NotFoundError(f"Note {note_id} not found")

    async def list_versions(self, note_id: str, user_id: str) -> list[NoteVersion]:
        """Snapshots of the note, newest first."""
        await self.get_note(note_id, user_id)
        return list(await self._repo.list_versions(user_id, note_id))

    async def get_version(self, note_id: str, version_id: str, user_id: str) -> NoteVersion:
        await self.get_note(note_id, user_id)
        version = await self._repo.get_version(user_id, note_id, version_id)
        if version is None:
            raise NotFoundError("Version not found")
        return version

    async def restore_version(self, note_id: str, version_id: str, user_id: str) -> Note:
        """Bring back a snapshot's title, body, tags and placement.

        The current state is snapshotted first, so a restore can itself be undone.
        """
        version = await self.get_version(note_id, version_id, user_id)
        snapshot = version.note

        def _restore(current: Note) -> dict:
            return {
                "title": snapshot.title,
                "content": snapshot.content,
                "tags": list(snapshot.tags),
                "notebook": snapshot.notebook,
                "folder": snapshot.folder,
                "version": current.version + 1,
                "restored_from_version": version.number,
                "updated_at": utc_now(),
            }

        note = await self._repo.modify(user_id, note_id, _restore, trigger="before_restore")
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        logger.info("Restored note %s to version %d for user %s", note_id, version.number, user_id)
        return note

    async def delete_version(self, note_id: str, version_id: str, user_id: str) -> None:
        await self.get_note(note_id, user_id)
        if not await self._repo.delete_version(user_id, note_id, version_id):
            raise NotFoundError("Version not found")

    async def search_notes(self, user_id: str, request: NoteSearchRequest) -> NoteSearchPage:
        notes = [n for n in await self._repo.list(user_id=user_id) if not n.deleted]
        if request.query:
            needle = request.query.lower()
            notes = [n for n in notes if needle in n.title.lower()]
        if request.tag:
            notes = [n for n in notes if request.tag in n.tags]
        if request.notebook:
            notes = [n for n in notes if n.notebook == request.notebook]
        if request.folder:
            notes = [n for n in notes if n.folder == request.folder]

        if request.sort_by == NoteSortField.TITLE:
            notes.sort(key=lambda n: n.title.lower())
        elif request.sort_by == NoteSortField.CREATED:
            notes.sort(key=lambda n: n.created_at)
        else:
            notes.sort(key=lambda n: n.last_modified)
        if request.sort_order == SortDirection.DESC:
            notes.reverse()

        page = notes[request.offset:request.offset + request.limit]
        return NoteSearchPage(notes=page, total=len(notes), offset=request.offset, limit=request.limit)
