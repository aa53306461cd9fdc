"""
Main entrypoint for the Blog API.

This module assembles the FastAPI application, sets up logging,
registers error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn blog_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import PersistenceError, log_and_sanitize_error
from .core.logging_config import setup_logging
from .repositories import PostRepository, build_repository
from .services.post_service import PostService

logger = logging.getLogger(__name__)


def _describe_validation_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append({"field": location, "message": error.get("msg", ""), "type": error.get("type", "")})
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Map validation, storage and unexpected failures to HTTP responses."""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = _describe_validation_errors(exc)
        message = "; ".join(
            f"{error['field']}: {error['message']}" if error["field"] else error["message"]
            for error in errors
        )
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": message or "Invalid request", "errors": errors},
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError) -> JSONResponse:
        message, _ = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": message},
        )

    # Exception handlers re-raise after responding; unexpected faults
    # stop in this middleware.
    @app.middleware("http")
    async def handle_unexpected_error(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            message, _ = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": message},
            )


def create_app(
    repository: Optional[PostRepository] = None,
    database_url: Optional[str] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    repository : Optional[PostRepository]
        Post store to serve from.  When omitted one is built from
        ``database_url``.
    database_url : Optional[str]
        SQLite path or ``:memory:``.  Defaults to
        ``settings.database_url``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    if repository is None:
        repository = build_repository(database_url or settings.database_url)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.post_service = PostService(repository)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Make sure the posts table exists before the first request.
        init = getattr(repository, "init", None)
        if init is not None:
            init()

    return app


app = create_app()
