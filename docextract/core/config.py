from __future__ import annotations

import json
import os
from typing import Any, List, Optional, Set, cast

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "application/zip",
        "application/x-zip-compressed",
    }
)


def _parse_csv_str(v: str) -> List[str]:
    """Parse a comma-separated string into a list of values, stripping whitespace."""
    return [x.strip() for x in v.split(",") if x.strip()]


def _normalise_content_type(value: str) -> str:
    """Lowercase a MIME type and drop parameters such as ``; charset=utf-8``."""
    return value.split(";", 1)[0].strip().lower()


class Settings(BaseSettings):
    """
    Application configuration settings, loaded from environment variables.
    """

    debug: bool = False
    commit_sha: Optional[str] = None
    prometheus_enabled: bool = True

    host: str = "0.0.0.0"
    port: int = 4000

    max_file_size_mb: int = 50
    max_member_size_mb: int = 50
    allowed_content_types: Set[str] = set(_DEFAULT_CONTENT_TYPES)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        # Disable automatic JSON parsing globally – custom validators handle coercion.
        enable_decoding=False,
    )

    @field_validator("allowed_content_types", mode="before")
    @classmethod
    def _coerce_allowed_content_types(cls, v: Any) -> Set[str]:
        """Accept comma-separated or JSON-array strings in addition to sets."""

        if v is None or v == "":
            return set()

        if isinstance(v, str):
            stripped_v = v.strip()
            if stripped_v.startswith("[") and stripped_v.endswith("]"):
                try:
                    parsed = json.loads(stripped_v)
                    if isinstance(parsed, list):
                        return {
                            _normalise_content_type(str(x)) for x in parsed if str(x).strip()
                        }
                except json.JSONDecodeError:
                    pass  # Fall through to CSV parsing for malformed JSON
            return {_normalise_content_type(x) for x in _parse_csv_str(v)}

        if isinstance(v, (list, set, tuple, frozenset)):
            return {_normalise_content_type(str(x)) for x in v if str(x).strip()}

        return cast(Set[str], v)

    @field_validator("max_file_size_mb", "max_member_size_mb")
    @classmethod
    def _validate_positive_limit(cls, v: int) -> int:
        """Size caps must be positive; zero would reject every upload."""
        if v <= 0:
            raise ValueError("size limits must be greater than 0 MB")
        return v

    def is_content_type_allowed(self, content_type: Optional[str]) -> bool:
        """
        Check if a declared upload content type is accepted.

        Args:
            content_type: The MIME type sent with the multipart part, possibly
                with parameters (``text/plain; charset=utf-8``).

        Returns:
            True if the base MIME type is in ``allowed_content_types``.
        """
        if not content_type:
            return False
        return _normalise_content_type(content_type) in self.allowed_content_types


# Public accessor – manual caching to support special behaviour in tests
_CACHED_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:  # noqa: D401 – accessor helper
    """Return a **singleton** Settings instance unless running under pytest.

    Under pytest every call yields a fresh instance so that tests can tweak
    the environment with ``monkeypatch`` and observe the result immediately.
    """

    global _CACHED_SETTINGS  # noqa: PLW0603 – module-level singleton

    if "PYTEST_CURRENT_TEST" in os.environ:
        return Settings()

    if _CACHED_SETTINGS is None:
        _CACHED_SETTINGS = Settings()

    return _CACHED_SETTINGS


def _clear_settings_cache() -> None:  # noqa: D401 – helper for tests
    """Clear the internal Settings singleton (used by unit-tests)."""

    global _CACHED_SETTINGS
    _CACHED_SETTINGS = None


get_settings.cache_clear = _clear_settings_cache  # type: ignore[attr-defined]
