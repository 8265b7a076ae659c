from __future__ import annotations

from datetime import datetime  # noqa: TCH003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, status

from notekeeper.api.v1.schemas.note import (
    NoteCreate,
    NoteRead,
    NoteSearchResponse,
    NoteTagsRead,
    NoteUpdate,
    NoteVersionRead,
    NoteVersionSummary,
    TagRemoveRequest,
)
from notekeeper.core.schemas.note_search import NoteSearchRequest, NoteSortField, SortDirection
from notekeeper.dependencies import get_note_service, get_tag_service, get_user_id

if TYPE_CHECKING:
    from notekeeper.core.services.note_service import NoteService
    from notekeeper.core.services.tag_service import TagService

router = APIRouter()


@router.post("", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    note = await service.create_note(payload, user_id=user_id)
    return NoteRead.model_validate(note)


@router.get("", response_model=list[NoteRead])
async def list_notes(
    deleted: bool = False,
    starred: bool = False,
    archived: bool = False,
    since: datetime | None = None,
    notebook: str | None = None,
    folder: str | None = None,
    tag: str | None = None,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    """List notes, newest first. ``deleted=true`` returns the trash instead."""
    notes = await service.list_notes(
        user_id,
        deleted=deleted,
        starred=starred,
        archived=archived,
        since=since,
        notebook=notebook,
        folder=folder,
        tag=tag,
    )
    return [NoteRead.model_validate(n) for n in notes]


@router.get("/search", response_model=NoteSearchResponse)
async def search_notes(
    search: str | None = None,
    tag: str | None = None,
    notebook: str | None = None,
    folder: str | None = None,
    sort_by: NoteSortField = NoteSortField.UPDATED,
    sort_order: SortDirection = SortDirection.DESC,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    request = NoteSearchRequest(
        query=search,
        tag=tag,
        notebook=notebook,
        folder=folder,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=offset,
        limit=limit,
    )
    page = await service.search_notes(user_id, request)
    return NoteSearchResponse(
        notes=[NoteRead.model_validate(n) for n in page.notes],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
    )


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id, user_id=user_id)
    return NoteRead.model_validate(note)


@router.patch("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    note = await service.update_note(note_id, payload, user_id=user_id)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", response_model=NoteRead)
async def delete_note(
    note_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    """Move the note to the trash."""
    note = await service.delete_note(note_id, user_id=user_id)
    return NoteRead.model_validate(note)


@router.post("/{note_id}/restore", response_model=NoteRead)
async def restore_note(
    note_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    note = await service.restore_note(note_id, user_id=user_id)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}/permanent", status_code=status.HTTP_204_NO_CONTENT)
async def purge_note(
    note_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    await service.purge_note(note_id, user_id=user_id)
    return None


@router.post("/{note_id}/tags/remove", response_model=NoteTagsRead)
async def remove_note_tag(
    note_id: str,
    payload: TagRemoveRequest,
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    """Remove one tag value from a note. UUID-shaped values can be removed like any other."""
    tags = await service.remove_tag_from_note(user_id, note_id, payload.tag)
    return NoteTagsRead(note_id=note_id, tags=tags)


@router.get("/{note_id}/versions", response_model=list[NoteVersionSummary])
async def list_note_versions(
    note_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    """Version history without note bodies, newest first."""
    versions = await service.list_versions(note_id, user_id=user_id)
    return [
        NoteVersionSummary(
            id=v.id, number=v.number, trigger=v.trigger, created_at=v.created_at, size=v.size
        )
        for v in versions
    ]


@router.get("/{note_id}/versions/{version_id}", response_model=NoteVersionRead)
async def get_note_version(
    note_id: str,
    version_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    v = await service.get_version(note_id, version_id, user_id=user_id)
    return NoteVersionRead(
        id=v.id,
        number=v.number,
        trigger=v.trigger,
        created_at=v.created_at,
        size=v.size,
        note=NoteRead.model_validate(v.note),
    )


@router.post("/{note_id}/restore/{version_id}", response_model=NoteRead)
async def restore_note_version(
    note_id: str,
    version_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    note = await service.restore_version(note_id, version_id, user_id=user_id)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}/versions/{version_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note_version(
    note_id: str,
    version_id: str,
    user_id: str = Depends(get_user_id),
    service: NoteService = Depends(get_note_service),
):
    await service.delete_version(note_id, version_id, user_id=user_id)
    return None
