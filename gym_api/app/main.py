"""
Main entrypoint for the gym membership API.

This module assembles the FastAPI application, sets up logging, owns
the shared database handle and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn gym_api.app.main:app --port 3000

Every error response has the shape ``{"message": "..."}``.  Request
validation failures (missing or malformed fields) are answered with
400 instead of FastAPI's default 422.
"""

import logging
from typing import Any, Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.exceptions import DataStoreError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "path", "query"}


def describe_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Build a one-line message naming every invalid or missing field."""
    fields: list[str] = []
    for error in errors:
        if error.get("type") == "json_invalid":
            # loc holds the byte offset of the syntax error, not a field.
            name = "body"
        else:
            parts = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
            name = ".".join(parts) or "body"
        if name not in fields:
            fields.append(name)
    return "Faltan campos obligatorios o tienen un formato inválido: " + ", ".join(fields)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the module-level settings
        read from the environment.
    database : Optional[Database]
        Database handle to serve from.  When omitted one is built from
        ``settings``.  The handle connects lazily, so creating the app
        never touches the database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.db = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": describe_validation_errors(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Error interno del servidor"},
        )

    @app.on_event("startup")
    async def startup_event() -> None:
        # Connect (and migrate) eagerly with the full retry budget, but
        # keep serving if the database is down: requests then make a
        # single reconnect attempt each until it is back.
        try:
            await run_in_threadpool(app.state.db.connect)
        except DataStoreError:
            logger.error("Could not connect to the database at startup; requests will retry")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        app.state.db.close()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
