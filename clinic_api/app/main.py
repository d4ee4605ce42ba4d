"""
Main entrypoint for the Clinic API.

This module assembles the FastAPI application: it validates the
settings, configures logging, builds the document store and the
services on top of it, installs the error handlers and mounts the API
router under ``/api``.  ``create_app`` does the work and the module
instantiates ``app`` at import time so it can be served directly::

    uvicorn clinic_api.app.main:app --reload

Importing this module without ``JWT_SECRET`` set raises
``ConfigurationError``: the API refuses to start with a guessable
signing key.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import ClinicError
from .core.logging_config import setup_logging
from .core.store import DocumentStore
from .services.appointment_service import AppointmentService
from .services.audit_service import AuditService
from .services.blog_service import BlogService
from .services.catalog_service import ServiceCatalogService
from .services.notification_service import NotificationService
from .services.submission_service import SubmissionService
from .services.user_service import UserService

logger = logging.getLogger(__name__)


def _describe_validation_error(exc: RequestValidationError) -> str:
    """Condense pydantic errors into one readable sentence."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if error.get("type") == "missing":
            messages.append(f"Missing required field: {location}")
        elif location:
            messages.append(f"{location}: {error.get('msg')}")
        else:
            messages.append(str(error.get("msg")))
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Convert every failure into a ``{"error": message}`` JSON body."""

    @app.exception_handler(ClinicError)
    async def clinic_error_handler(request: Request, exc: ClinicError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=exc.headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.  The object is stored on
        ``app.state.settings`` and handed to handlers through
        dependencies.

    Returns
    -------
    FastAPI
        A configured application.

    Raises
    ------
    ConfigurationError
        If the settings are unusable (e.g. no signing secret).
    """
    settings = settings or default_settings
    settings.validate()

    # Initialise logging before anything else so that the setup below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    store = DocumentStore(settings.data_dir)
    store.ensure_data_dir()
    audit = AuditService(settings.data_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Seed the first administrator so the dashboard is reachable on a
        # fresh data directory.
        await app.state.user_service.ensure_bootstrap_admin(settings.admin_username, settings.admin_password)
        logger.info("Serving data from %s", store.data_dir.resolve())
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.audit_service = audit
    app.state.notification_service = NotificationService(settings.data_dir)
    app.state.catalog_service = ServiceCatalogService(store, audit)
    app.state.blog_service = BlogService(store, audit)
    app.state.appointment_service = AppointmentService(store, audit)
    app.state.submission_service = SubmissionService(store, audit)
    app.state.user_service = UserService(store, audit)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
