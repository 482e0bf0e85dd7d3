from __future__ import annotations

from typing import Optional

import structlog
from fastapi import UploadFile

from docextract.core.config import Settings, get_settings
from docextract.core.exceptions import (
    NoFileError,
    SizeLimitExceededError,
    UnsupportedContentTypeError,
)

__all__: list[str] = ["validate_upload"]

logger = structlog.get_logger(__name__)


def _validate_filename(filename: Optional[str]) -> str:
    """Ensure a file part was sent and that it carries a name."""
    if not filename:
        logger.warning("upload_rejected_no_file")
        raise NoFileError("No file uploaded")
    return filename


def _validate_content_type(file: UploadFile, filename: str, settings: Settings) -> None:
    """Reject uploads whose declared MIME type is not on the allow-list."""
    if not settings.is_content_type_allowed(file.content_type):
        logger.warning(
            "upload_rejected_content_type",
            filename=filename,
            content_type=file.content_type,
        )
        raise UnsupportedContentTypeError(
            "Invalid file type. Only PDF, DOCX, TXT, and ZIP files are allowed."
        )


def _validate_size(file: UploadFile, filename: str, settings: Settings) -> int:
    """Measure the spooled upload and enforce ``max_file_size_mb`` (inclusive)."""
    current_pos = file.file.tell()
    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(current_pos)  # Reset position

    max_size = settings.max_file_size_mb * 1024 * 1024
    if size > max_size:
        logger.warning(
            "upload_rejected_size",
            size=size,
            max_size=max_size,
            filename=filename,
        )
        raise SizeLimitExceededError(
            "File size limit exceeded. "
            f"Maximum size is {settings.max_file_size_mb}MB."
        )
    return size


def validate_upload(file: UploadFile, *, settings: Optional[Settings] = None) -> int:
    """
    Validate an uploaded file before any extraction is attempted.

    Performs checks for:
    - Missing file / filename
    - Declared content type
    - File size limit (a payload of exactly the limit is accepted)

    Args:
        file: The uploaded file to validate
        settings: Optional Settings instance (uses global if not provided)

    Returns:
        The size of the upload in bytes.

    Raises:
        NoFileError: No filename on the upload.
        UnsupportedContentTypeError: Content type outside the allow-list.
        SizeLimitExceededError: Upload larger than ``max_file_size_mb``.
    """
    settings = settings or get_settings()

    filename = _validate_filename(file.filename)
    _validate_content_type(file, filename, settings)
    size = _validate_size(file, filename, settings)

    logger.debug(
        "upload_validation_passed",
        filename=filename,
        size_bytes=size,
        content_type=file.content_type,
    )
    return size
