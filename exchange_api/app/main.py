"""
Main entrypoint for the Exchange API.

This module assembles the FastAPI application, sets up logging, CORS
and the exchange store, and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, so it can be served
with uvicorn or another ASGI server, e.g.::

    uvicorn exchange_api.app.main:app --reload

The application title, version and storage directory are provided via
``Settings`` from ``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.errors import ExchangeError
from .core.logging_config import setup_logging
from .core.storage import ExchangeStore


logger = logging.getLogger(__name__)


async def exchange_error_handler(request: Request, exc: ExchangeError) -> JSONResponse:
    """Render domain errors as ``{"detail": ..., "code": ...}``."""
    logger.info("%s %s rejected: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module level ``settings``.
        Tests pass their own instance to point the store at a temporary
        directory.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The exchange store
        is loaded from disk when the application starts; a corrupt
        exchange file makes startup fail.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    store = ExchangeStore(app_settings.exchanges_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        store.load()
        yield

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )
    app.add_exception_handler(ExchangeError, exchange_error_handler)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
