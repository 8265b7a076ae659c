from __future__ import annotations

import asyncio
import os
from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from notekeeper import __version__
from notekeeper.config import settings
from notekeeper.dependencies import get_storage_root

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "notekeeper-api",
            "version": __version__,
        },
    )


@router.get("/ready")
async def readiness_check(root: Path = Depends(get_storage_root)):
    """Readiness check endpoint. Reports whether the notes directory is usable."""

    def _check_storage() -> str:
        root.mkdir(parents=True, exist_ok=True)
        if not os.access(root, os.W_OK):
            return "error: not writable"
        return "available"

    try:
        storage_status = await asyncio.to_thread(_check_storage)
    except OSError as e:
        storage_status = f"error: {e}"

    ready = storage_status == "available"
    return JSONResponse(
        status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if ready else "unavailable",
            "storage": storage_status,
            "cors_origins": settings.cors_origins,
            "api_prefix": settings.api_prefix,
        },
    )
