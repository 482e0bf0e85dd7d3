"""docextract ─ FastAPI application
==================================

This module hosts the **production ASGI application**.

Usage
-----
Run locally with::

    uvicorn docextract.api.app:app --reload

or through the ``docextract`` console script (see :mod:`docextract.main`).
"""

from __future__ import annotations

# third-party
import structlog
from fastapi import APIRouter, FastAPI
from prometheus_fastapi_instrumentator import Instrumentator

# local imports
from docextract import __version__
from docextract.api.errors import add_exception_handlers, unhandled_exception_handler
from docextract.api.routes import admin as admin_router_module
from docextract.api.routes import upload as upload_router_module
from docextract.core.config import get_settings
from docextract.core.logging import RequestLoggingMiddleware, configure_logging

__all__: list[str] = ["app", "create_app"]

# ---------------------------------------------------------------------------
# Initialise *process-wide* logging before any logger instantiation.
# ---------------------------------------------------------------------------
settings = get_settings()
configure_logging(settings.debug)
logger = structlog.get_logger(__name__)


def _register_routes(app_instance: FastAPI) -> None:
    """Include every API router into the FastAPI application."""
    routers: list[APIRouter] = [
        upload_router_module.router,
        admin_router_module.router,
    ]
    for router in routers:
        app_instance.include_router(router)


def create_app() -> FastAPI:  # noqa: D401 – factory
    """Build and configure the FastAPI application."""

    app_instance = FastAPI(
        title="docextract",
        description="Extract plain text from PDF, DOCX, TXT and ZIP uploads.",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    # ------------------------------------------------------------------
    # Middleware – logging comes first so later handlers inherit context vars.
    # ------------------------------------------------------------------
    app_instance.add_middleware(
        RequestLoggingMiddleware, error_handler=unhandled_exception_handler
    )

    @app_instance.on_event("startup")
    async def _on_startup() -> None:  # pragma: no cover – trivial logging
        logger.info(
            "fastapi_startup",
            commit_sha=settings.commit_sha,
            max_file_size_mb=settings.max_file_size_mb,
        )

    @app_instance.on_event("shutdown")
    async def _on_shutdown() -> None:  # pragma: no cover – trivial logging
        logger.info("fastapi_shutdown")

    @app_instance.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:  # noqa: D401
        return {"message": "docextract document text extraction API"}

    _register_routes(app_instance)
    add_exception_handlers(app_instance)

    # Prometheus metrics are exposed under /metrics, outside the OpenAPI schema.
    if settings.prometheus_enabled:
        Instrumentator().instrument(app_instance).expose(
            app_instance,
            endpoint="/metrics",
            include_in_schema=False,
        )
        logger.info("prometheus_instrumentation_enabled")

    return app_instance


# Instantiate once at import time.
app: FastAPI = create_app()
