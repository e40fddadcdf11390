"""
FastAPI application for PastePal.

`create_app` wires the two external collaborators (credential store and
document store) into the services and mounts the routers. The module-level
`app` uses the local in-process backends.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pastepal import __version__
from pastepal.api.pastes import SKIPPED_HEADER, router as pastes_router
from pastepal.auth.credentials import CredentialStore
from pastepal.auth.local import LocalCredentialStore
from pastepal.auth.routes import router as auth_router
from pastepal.config import Settings, configure_logging, get_settings
from pastepal.core.errors import PastePalError
from pastepal.integrations.sentry import capture_exception, init_sentry
from pastepal.services import AccountService, PasteService
from pastepal.storage import DocumentStore, InMemoryDocumentStore, RetryingDocumentStore

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings: Settings = app.state.settings

    configure_logging(settings)
    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    logger.info(f"PastePal API starting in {settings.environment} mode")

    yield

    logger.info("PastePal API shutting down")


# =============================================================================
# Error Handlers
# =============================================================================


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(PastePalError)
    async def pastepal_error_handler(request: Request, exc: PastePalError):
        settings: Settings = request.app.state.settings
        if exc.status_code >= 500 and exc.detail:
            logger.error(f"{request.method} {request.url.path}: {exc.message}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.public_message(settings.expose_internal_errors)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": f"Invalid request body: {problems}"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        capture_exception(exc, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


# =============================================================================
# App Setup
# =============================================================================


def create_app(
    settings: Settings | None = None,
    credentials: CredentialStore | None = None,
    documents: DocumentStore | None = None,
) -> FastAPI:
    """
    Build the application.

    Backends default to the in-process implementations. The document store
    is wrapped with retry/timeout when either is configured.
    """
    settings = settings or get_settings()
    if credentials is None:
        credentials = LocalCredentialStore(settings)
    if documents is None:
        documents = InMemoryDocumentStore()

    if settings.store_retry_attempts > 1 or settings.store_timeout_seconds:
        documents = RetryingDocumentStore(
            documents,
            attempts=settings.store_retry_attempts,
            wait_seconds=settings.store_retry_wait_seconds,
            timeout_seconds=settings.store_timeout_seconds,
        )

    app = FastAPI(
        title="PastePal API",
        description="Share text and image pastes behind bearer-token auth",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.credentials = credentials
    app.state.documents = documents
    app.state.account_service = AccountService(
        credentials,
        documents,
        reject_credential_mismatch=settings.reject_credential_mismatch,
    )
    app.state.paste_service = PasteService(documents)

    # Authorization is a response header clients must be able to read
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Authorization", SKIPPED_HEADER],
    )

    _register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(pastes_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "pastepal-api"}

    return app


app = create_app()
