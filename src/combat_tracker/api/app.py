"""FastAPI application factory for the Combat Tracker.

Run with:
    combat-tracker-api
or:
    uvicorn combat_tracker.api.app:create_app --factory
"""

from __future__ import annotations

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from combat_tracker.api.routes import (
    characters_router,
    system_router,
    turn_router,
    tutorial_router,
)
from combat_tracker.core.config import Settings, get_settings
from combat_tracker.core.exceptions import (
    CombatTrackerError,
    NotFoundError,
    StorageFault,
    ValidationError,
)
from combat_tracker.core.logging import bind_context, clear_context, configure_logging, get_logger
from combat_tracker.engine.session import CombatSession
from combat_tracker.storage import Stores, create_stores

logger = get_logger(__name__)


_STATUS_BY_ERROR: list[tuple[type[CombatTrackerError], int]] = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (StorageFault, 500),
]


def error_status(exc: CombatTrackerError) -> int:
    """Map a domain error to an HTTP status code."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_body(exc: CombatTrackerError) -> dict[str, object]:
    """Build the JSON-safe failure body returned to clients."""
    return jsonable_encoder(exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Translate domain and request errors into structured responses."""

    @app.exception_handler(CombatTrackerError)
    async def handle_domain_error(request: Request, exc: CombatTrackerError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc)
        else:
            logger.warning("Request rejected", path=request.url.path, error=exc)
        return JSONResponse(status_code=status_code, content=error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        loc = errors[0].get("loc", ()) if errors else ()
        # Drop the leading "body"/"path" segment from the location
        field_name = str(loc[-1]) if len(loc) > 1 else None
        error = ValidationError(
            "Malformed request",
            field_name=field_name,
            details={"errors": len(errors)},
        )
        logger.warning("Malformed request", path=request.url.path, field_name=field_name)
        return JSONResponse(status_code=400, content=error_body(error))


def create_app(settings: Settings | None = None, stores: Stores | None = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Application settings. Defaults to the cached settings.
        stores: Pre-built stores (tests). Defaults to the configured backend.

    Returns:
        A configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)

    stores = stores or create_stores(settings.storage)
    session = CombatSession(stores.combatants, group_by_type=settings.tracker.group_by_type)
    if settings.tracker.seed_on_startup:
        session.seed()

    app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
    app.state.settings = settings
    app.state.stores = stores
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        clear_context()
        bind_context(request_id=str(uuid4()), method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    register_exception_handlers(app)
    app.include_router(characters_router)
    app.include_router(turn_router)
    app.include_router(tutorial_router)
    app.include_router(system_router)

    logger.info(
        "API application created",
        backend=settings.storage.backend,
        group_by_type=settings.tracker.group_by_type,
    )
    return app


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.api.host, port=settings.api.port)


__all__ = [
    "create_app",
    "error_status",
    "error_body",
    "register_exception_handlers",
    "run",
]
