from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from notekeeper.api.v1.schemas.tag import TagCreate, TagRead, TagUpdate
from notekeeper.core.schemas.reorder import ReorderRequest
from notekeeper.core.schemas.taxonomy import NoteTaxonomy
from notekeeper.dependencies import get_tag_service, get_user_id

if TYPE_CHECKING:
    from notekeeper.core.services.tag_service import TagService

router = APIRouter()


@router.get("", response_model=list[TagRead])
async def list_tags(
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    """Return explicit tags and tags found on notes, most used first.

    UUID-shaped values left on notes by importers are never listed.
    """
    return [TagRead.model_validate(t) for t in await service.list_tags(user_id)]


@router.get("/counts", response_model=NoteTaxonomy)
async def tag_counts(
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
) -> NoteTaxonomy:
    """Return the bare tag projection: name and number of live notes per tag."""
    return await service.tag_counts(user_id)


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagCreate,
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    tag = await service.create_tag(user_id, payload)
    return TagRead(**tag.model_dump(exclude={"user_id"}), note_count=0)


@router.post("/reorder", response_model=list[TagRead])
async def reorder_tags(
    payload: ReorderRequest,
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    """Move one explicit tag before or after another; returns explicit tags in their new order."""
    tags = await service.reorder_tags(user_id, payload)
    counts = (await service.tag_counts(user_id)).as_dict()
    return [TagRead(**t.model_dump(exclude={"user_id"}), note_count=counts.get(t.name, 0)) for t in tags]


@router.put("/{tag_id}", response_model=TagRead)
async def update_tag(
    tag_id: str,
    payload: TagUpdate,
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    tag = await service.update_tag(user_id, tag_id, payload)
    counts = (await service.tag_counts(user_id)).as_dict()
    return TagRead(**tag.model_dump(exclude={"user_id"}), note_count=counts.get(tag.name, 0))


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    user_id: str = Depends(get_user_id),
    service: TagService = Depends(get_tag_service),
):
    await service.delete_tag(user_id, tag_id)
    return None
