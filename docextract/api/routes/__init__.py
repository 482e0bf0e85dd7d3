"""docextract/api/routes/__init__.py
###############################################################################
FastAPI **router package marker**.
###############################################################################
Each route module defines a module-level ``router`` (``fastapi.APIRouter``);
registration happens in :mod:`docextract.api.app`.
"""

from __future__ import annotations

__all__: list[str] = []
