from __future__ import annotations

from fastapi import APIRouter

from .endpoints import folders, health, notebooks, notes, tags

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(notes.router, prefix="/{user_id}/notes", tags=["notes"])
api_router.include_router(tags.router, prefix="/{user_id}/tags", tags=["tags"])
api_router.include_router(notebooks.router, prefix="/{user_id}/notebooks", tags=["notebooks"])
api_router.include_router(folders.router, prefix="/{user_id}/folders", tags=["folders"])
