from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Depends

from notekeeper.config import settings
from notekeeper.core.errors import InvalidInputError
from notekeeper.core.models.collection import CollectionKind
from notekeeper.core.repositories.implementations.filesystem.collection_repository import (
    FileCollectionRepository,
)
from notekeeper.core.repositories.implementations.filesystem.note_repository import (
    FileNoteRepository,
)
from notekeeper.core.services.collection_service import FolderService, NotebookService
from notekeeper.core.services.note_service import NoteService
from notekeeper.core.services.tag_service import TagService
from notekeeper.utils.logging import get_logger
from notekeeper.utils.validation import is_safe_identifier

if TYPE_CHECKING:
    from notekeeper.core.repositories.collection_repository import CollectionRepository
    from notekeeper.core.repositories.note_repository import NoteRepository

logger = get_logger(__name__)


def get_storage_root() -> Path:
    """Directory holding one sub-directory per user."""
    return Path(settings.notes_base_path)


def get_user_id(user_id: str) -> str:
    """Validate the ``{user_id}`` path segment before it touches the filesystem."""
    if not is_safe_identifier(user_id):
        logger.warning("Rejected user id", extra={"user_id": user_id[:80]})
        raise InvalidInputError("Invalid user id")
    return user_id


def get_note_repository(root: Path = Depends(get_storage_root)) -> NoteRepository:
    return FileNoteRepository(root, max_versions=settings.max_versions_per_note)


def get_tag_repository(root: Path = Depends(get_storage_root)) -> CollectionRepository:
    return FileCollectionRepository(root, CollectionKind.TAG)


def get_notebook_repository(root: Path = Depends(get_storage_root)) -> CollectionRepository:
    return FileCollectionRepository(root, CollectionKind.NOTEBOOK)


def get_folder_repository(root: Path = Depends(get_storage_root)) -> CollectionRepository:
    return FileCollectionRepository(root, CollectionKind.FOLDER)


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    """Get a request-scoped note service instance."""
    return NoteService(repo)


def get_tag_service(
    note_repo: NoteRepository = Depends(get_note_repository),
    tag_repo: CollectionRepository = Depends(get_tag_repository),
) -> TagService:
    return TagService(note_repo, tag_repo)


def get_notebook_service(
    repo: CollectionRepository = Depends(get_notebook_repository),
    note_repo: NoteRepository = Depends(get_note_repository),
) -> NotebookService:
    return NotebookService(repo, note_repo)


def get_folder_service(
    repo: CollectionRepository = Depends(get_folder_repository),
    note_repo: NoteRepository = Depends(get_note_repository),
) -> FolderService:
    return FolderService(repo, note_repo)
