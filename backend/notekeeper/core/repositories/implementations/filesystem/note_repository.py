from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from notekeeper.core.models.note import Note
from notekeeper.core.models.version import NoteVersion, change_trigger
from notekeeper.core.repositories.note_repository import NoteRepository
from notekeeper.utils.logging import get_logger
from notekeeper.utils.validation import is_safe_identifier

from .storage import atomic_write_text, load_json, run_blocking, save_json, user_lock

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = get_logger(__name__)


class FileNoteRepository(NoteRepository):
    """Directory-per-note implementation of the NoteRepository.

    Layout: ``<root>/<user_id>/<note_id>/metadata.json`` holds every field
    except the body, which lives next to it in ``note.md``. Snapshots go to
    ``versions/v<N>.json`` in the same directory.
    """

    METADATA_FILE = "metadata.json"
    CONTENT_FILE = "note.md"
    VERSIONS_DIR = "versions"
    IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at"})

    def __init__(self, root: Path, *, max_versions: int = 100) -> None:
        self._root = Path(root)
        self._max_versions = max_versions

    async def create(self, note: Note) -> Note:
        def _write() -> Note:
            with user_lock(self._user_dir(note.user_id), exclusive=True):
                self._write_note(note)
            return note

        stored = await run_blocking(_write)
        logger.debug("Created note %s for user %s", note.id, note.user_id)
        return stored

    async def get(self, user_id: str, note_id: str) -> Note | None:
        if not is_safe_identifier(note_id):
            return None
        return await run_blocking(lambda: self._read_note(self._note_dir(user_id, note_id)))

    async def list(self, *, user_id: str) -> Sequence[Note]:
        def _scan() -> list[Note]:
            user_dir = self._user_dir(user_id)
            if not user_dir.is_dir():
                return []
            notes: list[Note] = []
            with user_lock(user_dir, exclusive=False):
                for entry in sorted(user_dir.iterdir()):
                    if not entry.is_dir():
                        continue
                    note = self._read_note(entry)
                    if note is not None:
                        notes.append(note)
            return notes

        return await run_blocking(_scan)

    async def modify(
        self,
        user_id: str,
        note_id: str,
        mutate: Callable[[Note], dict[str, Any] | None],
        *,
        trigger: str | None = None,
    ) -> Note | None:
        if not is_safe_identifier(note_id):
            return None

        def _update() -> Note | None:
            note_dir = self._note_dir(user_id, note_id)
            with user_lock(self._user_dir(user_id), exclusive=True):
                existing = self._read_note(note_dir)
                if existing is None:
                    return None
                changes = mutate(existing) or {}
                sanitized = {k: v for k, v in changes.items() if k not in self.IMMUTABLE_FIELDS}
                if not sanitized:
                    return existing
                updated = Note.model_validate({**existing.model_dump(), **sanitized})
                reason = trigger or change_trigger(existing, updated)
                if reason is not None:
                    self._save_version(existing, reason)
                self._write_note(updated)
                return updated

        return await run_blocking(_update)

    async def delete(self, user_id: str, note_id: str) -> bool:
        if not is_safe_identifier(note_id):
            return False

        def _remove() -> bool:
            note_dir = self._note_dir(user_id, note_id)
            with user_lock(self._user_dir(user_id), exclusive=True):
                if not (note_dir / self.METADATA_FILE).is_file():
                    return False
                shutil.rmtree(note_dir)
                return True

        removed = await run_blocking(_remove)
        if removed:
            logger.info("Permanently deleted note %s for user %s", note_id, user_id)
        return removed

    async def list_versions(self, user_id: str, note_id: str) -> Sequence[NoteVersion]:
        if not is_safe_identifier(note_id):
            return []

        def _scan() -> list[NoteVersion]:
            user_dir = self._user_dir(user_id)
            if not user_dir.is_dir():
                return []
            with user_lock(user_dir, exclusive=False):
                return self._read_versions(self._note_dir(user_id, note_id))

        return await run_blocking(_scan)

    async def get_version(self, user_id: str, note_id: str, version_id: str) -> NoteVersion | None:
        for version in await self.list_versions(user_id, note_id):
            if version.id == version_id:
                return version
        return None

    async def delete_version(self, user_id: str, note_id: str, version_id: str) -> bool:
        if not is_safe_identifier(note_id):
            return False

        def _remove() -> bool:
            note_dir = self._note_dir(user_id, note_id)
            with user_lock(self._user_dir(user_id), exclusive=True):
                for version in self._read_versions(note_dir):
                    if version.id == version_id:
                        self._version_path(note_dir, version.number).unlink()
                        return True
                return False

        return await run_blocking(_remove)

    def _read_versions(self, note_dir: Path) -> list[NoteVersion]:
        versions_dir = note_dir / self.VERSIONS_DIR
        if not versions_dir.is_dir():
            return []
        versions: list[NoteVersion] = []
        for path in versions_dir.glob("v*.json"):
            try:
                versions.append(NoteVersion.model_validate(load_json(path)))
            except (ValueError, ValidationError) as err:
                logger.warning("Skipping unreadable note version %s: %s", path, err)
        versions.sort(key=lambda v: v.number, reverse=True)
        return versions

    def _save_version(self, note: Note, trigger: str) -> None:
        """Snapshot ``note`` and drop the oldest snapshots beyond the limit. Caller holds the lock."""
        note_dir = self._note_dir(note.user_id, note.id)
        versions = self._read_versions(note_dir)
        number = versions[0].number + 1 if versions else 1
        version = NoteVersion(number=number, note_id=note.id, user_id=note.user_id, trigger=trigger, note=note)
        save_json(self._version_path(note_dir, number), version.model_dump(mode="json"))
        for stale in versions[max(self._max_versions - 1, 0):]:
            self._version_path(note_dir, stale.number).unlink(missing_ok=True)
        logger.debug("Saved version %d of note %s (%s)", number, note.id, trigger)

    def _version_path(self, note_dir: Path, number: int) -> Path:
        return note_dir / self.VERSIONS_DIR / f"v{number}.json"

    def _user_dir(self, user_id: str) -> Path:
        return self._root / user_id

    def _note_dir(self, user_id: str, note_id: str) -> Path:
        return self._root / user_id / note_id

    def _read_note(self, note_dir: Path) -> Note | None:
        meta_path = note_dir / self.METADATA_FILE
        if not meta_path.is_file():
            return None
        try:
            meta = load_json(meta_path)
            content_path = note_dir / self.CONTENT_FILE
            content = content_path.read_text(encoding="utf-8") if content_path.is_file() else ""
            return Note.model_validate({**meta, "content": content})
        except (ValueError, ValidationError) as err:
            # json.JSONDecodeError is a ValueError
            logger.warning("Skipping unreadable note metadata %s: %s", meta_path, err)
            return None

    def _write_note(self, note: Note) -> None:
        note_dir = self._note_dir(note.user_id, note.id)
        atomic_write_text(note_dir / self.CONTENT_FILE, note.content)
        save_json(note_dir / self.METADATA_FILE, note.model_dump(mode="json", exclude={"content"}))
