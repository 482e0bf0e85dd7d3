from __future__ import annotations

from typing import Dict

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from docextract.core.config import Settings, get_settings

__all__: list[str] = [
    "router",
]

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Admin"])

SETTINGS_DEP: Settings = Depends(get_settings)


@router.get("/health", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    """Return service health status."""
    return {"status": "OK"}


@router.get("/version", summary="Application version information")
async def version(
    request: Request,
    settings: Settings = SETTINGS_DEP,
) -> JSONResponse:
    """Return the application version declared on the FastAPI instance plus
    the git commit SHA the process was built from."""

    return JSONResponse(
        {
            "version": request.app.version,
            "commit_sha": settings.commit_sha,
        }
    )
