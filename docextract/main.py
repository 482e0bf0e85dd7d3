"""
Command-line entry point.

Starts the FastAPI application with Uvicorn on the configured host/port.
In production a process manager (Gunicorn with Uvicorn workers, or several
Uvicorn processes) would typically run ``docextract.api.app:app`` instead.
"""

from __future__ import annotations

import uvicorn

from docextract.core.config import get_settings


def run() -> None:
    """Serve ``docextract.api.app:app`` until interrupted."""
    settings = get_settings()
    uvicorn.run(
        "docextract.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
