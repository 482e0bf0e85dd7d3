from __future__ import annotations

from .validators import validate_upload

__all__: list[str] = ["validate_upload"]
