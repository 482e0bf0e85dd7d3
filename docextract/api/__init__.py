"""docextract API package.

The FastAPI application lives in :mod:`docextract.api.app`.  This package
root stays import-free so that lower layers (the extraction service imports
:mod:`docextract.api.schemas`) can load without building the application.
"""

from __future__ import annotations

__all__: list[str] = []
