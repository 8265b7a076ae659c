from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from . import __version__
from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import settings
from .core.errors import InvalidInputError, NotFoundError
from .utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.info("Rejected request", extra={"path": request.url.path, "reason": exc.message})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Notekeeper API",
        description="File-backed notes, notebooks, folders and tags",
        debug=settings.debug,
        version=__version__,
        root_path=settings.root_path or "",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=[
            "Accept",
            "Accept-Language",
            "Content-Language",
            "Content-Type",
            "X-Requested-With",
        ],
        max_age=600,
    )

    # Proxy headers (X-Forwarded-*) when behind a reverse proxy
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware)

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
