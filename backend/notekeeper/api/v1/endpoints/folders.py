from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notekeeper.api.v1.schemas.collection import FolderCreate, FolderRead, FolderUpdate
from notekeeper.core.schemas.reorder import ReorderRequest
from notekeeper.dependencies import get_folder_service, get_user_id

if TYPE_CHECKING:
    from notekeeper.core.services.collection_service import FolderService

router = APIRouter()


@router.get("", response_model=list[FolderRead])
async def list_folders(
    user_id: str = Depends(get_user_id),
    service: FolderService = Depends(get_folder_service),
):
    return [FolderRead.model_validate(f) for f in await service.list_with_counts(user_id)]


@router.post("", response_model=FolderRead, status_code=status.HTTP_201_CREATED)
async def create_folder(
    payload: FolderCreate,
    user_id: str = Depends(get_user_id),
    service: FolderService = Depends(get_folder_service),
):
    folder = await service.create(user_id, payload)
    return FolderRead(**folder.model_dump(exclude={"user_id"}), note_count=0)


@router.post("/reorder", response_model=list[FolderRead])
async def reorder_folders(
    payload: ReorderRequest,
    user_id: str = Depends(get_user_id),
    service: FolderService = Depends(get_folder_service),
):
    await service.reorder(user_id, payload)
    return [FolderRead.model_validate(f) for f in await service.list_with_counts(user_id)]


@router.put("/{folder_id}", response_model=FolderRead)
async def update_folder(
    folder_id: str,
    payload: FolderUpdate,
    user_id: str = Depends(get_user_id),
    service: FolderService = Depends(get_folder_service),
):
    await service.update(user_id, folder_id, payload)
    return next(
        FolderRead.model_validate(f)
        for f in await service.list_with_counts(user_id)
        if f["id"] == folder_id
    )


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    user_id: str = Depends(get_user_id),
    service: FolderService = Depends(get_folder_service),
):
    await service.delete(user_id, folder_id)
    return None
