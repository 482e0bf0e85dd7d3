"""
Upload Extraction Orchestrator

Turns one uploaded payload into the public :class:`UploadResponse`.

Key Responsibilities:
- Classify the upload by its original filename.
- Route ZIP uploads to the archive extractor and everything else to the
  single-document extractor.
- Shape the uniform success response (``content`` for documents, ``files``
  for archives).
- Release the staged upload exactly once, whatever the outcome.

Errors are not converted here: every `DocumentExtractionError` propagates to
the exception handlers in `docextract.api.errors`, which produce the single
top-level error response.  Only per-member archive failures are reported
inline, by the archive extractor.
"""

from __future__ import annotations

import time
from typing import Optional

import structlog
from starlette.datastructures import UploadFile

from docextract.api.schemas import MemberResultSchema, UploadResponse
from docextract.core.config import Settings, get_settings
from docextract.core.exceptions import NoFileError
from docextract.extraction import (
    DocumentKind,
    classify_filename,
    extract_archive,
    extract_document,
)

__all__: list[str] = ["extract_payload", "handle_upload"]

logger = structlog.get_logger(__name__)


async def extract_payload(
    payload: bytes, filename: str, *, settings: Optional[Settings] = None
) -> UploadResponse:
    """
    Extract text from an in-memory upload.

    Args:
        payload: The uploaded bytes.
        filename: The client-supplied filename; its extension picks the path.
        settings: Optional Settings instance (uses global if not provided).

    Returns:
        ``UploadResponse`` with ``files`` for ZIP uploads, ``content`` otherwise.

    Raises:
        DocumentExtractionError: Any whole-upload failure (unsupported kind,
            decode error, parser failure, unreadable archive).
    """
    settings = settings or get_settings()
    start_time = time.perf_counter()
    kind = classify_filename(filename)

    if kind is DocumentKind.ZIP:
        members = await extract_archive(
            payload, max_member_bytes=settings.max_member_size_mb * 1024 * 1024
        )
        response = UploadResponse(
            success=True,
            filename=filename,
            files=[MemberResultSchema.from_member(member) for member in members],
        )
    else:
        text = await extract_document(payload, kind, filename=filename)
        response = UploadResponse(success=True, filename=filename, content=text)

    logger.info(
        "upload_extracted",
        filename=filename,
        kind=kind.value if kind else None,
        size_bytes=len(payload),
        processing_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    return response


async def handle_upload(
    file: Optional[UploadFile], *, settings: Optional[Settings] = None
) -> UploadResponse:
    """
    Run the extraction pipeline for a staged multipart upload.

    The staged upload (Starlette spools it to a temporary file) is closed in a
    ``finally`` block, so it is released exactly once on success and on every
    failure path.

    Raises:
        NoFileError: If no file (or a nameless file) was uploaded.
        DocumentExtractionError: Propagated from :func:`extract_payload`.
    """
    if file is None or not file.filename:
        raise NoFileError("No file uploaded")

    try:
        await file.seek(0)
        payload = await file.read()
        return await extract_payload(payload, file.filename, settings=settings)
    finally:
        await file.close()
