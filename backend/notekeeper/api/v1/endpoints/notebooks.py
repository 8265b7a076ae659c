from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notekeeper.api.v1.schemas.collection import NotebookCreate, NotebookRead, NotebookUpdate
from notekeeper.core.schemas.reorder import ReorderRequest
from notekeeper.dependencies import get_notebook_service, get_user_id

if TYPE_CHECKING:
    from notekeeper.core.services.collection_service import NotebookService

router = APIRouter()


@router.get("", response_model=list[NotebookRead])
async def list_notebooks(
    user_id: str = Depends(get_user_id),
    service: NotebookService = Depends(get_notebook_service),
):
    """Notebooks in sort order, each with its number of live notes."""
    return [NotebookRead.model_validate(n) for n in await service.list_with_counts(user_id)]


@router.post("", response_model=NotebookRead, status_code=status.HTTP_201_CREATED)
async def create_notebook(
    payload: NotebookCreate,
    user_id: str = Depends(get_user_id),
    service: NotebookService = Depends(get_notebook_service),
):
    notebook = await service.create(user_id, payload)
    return NotebookRead(**notebook.model_dump(exclude={"user_id"}), note_count=0)


@router.post("/reorder", response_model=list[NotebookRead])
async def reorder_notebooks(
    payload: ReorderRequest,
    user_id: str = Depends(get_user_id),
    service: NotebookService = Depends(get_notebook_service),
):
    await service.reorder(user_id, payload)
    return [NotebookRead.model_validate(n) for n in await service.list_with_counts(user_id)]


@router.put("/{notebook_id}", response_model=NotebookRead)
async def update_notebook(
    notebook_id: str,
    payload: NotebookUpdate,
    user_id: str = Depends(get_user_id),
    service: NotebookService = Depends(get_notebook_service),
):
    await service.update(user_id, notebook_id, payload)
    return next(
        NotebookRead.model_validate(n)
        for n in await service.list_with_counts(user_id)
        if n["id"] == notebook_id
    )


@router.delete("/{notebook_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notebook(
    notebook_id: str,
    user_id: str = Depends(get_user_id),
    service: NotebookService = Depends(get_notebook_service),
):
    await service.delete(user_id, notebook_id)
    return None
