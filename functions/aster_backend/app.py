"""
FastAPI application entry point for the Aster & Co. content service.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from aster_backend.config import get_settings
from aster_backend.errors import StoreWriteError
from aster_backend.routes import router

logger = logging.getLogger(__name__)


async def store_write_error_handler(request: Request, exc: StoreWriteError):
    logger.error("Write rejected on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={
            "detail": "The change could not be saved. Check your connection and "
            "permissions, then try again.",
            "operation": exc.operation,
            "collection": exc.collection,
        },
    )


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(title="Aster & Co. Content API", version="0.1.0")
    app.add_exception_handler(StoreWriteError, store_write_error_handler)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
