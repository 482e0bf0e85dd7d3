"""docextract/extraction/archive.py
###############################################################################
ZIP archive extraction with per-member isolation
###############################################################################
Every qualifying member (PDF, DOCX or TXT, not a directory) is extracted on
its own and reported in the archive's native entry order.  A member that
fails yields a failure result in place; it never aborts the remaining
members.  Everything else (directories, other extensions, nested ZIPs) is
skipped without a trace in the output.

Resource model
==============
1. The archive is read from an in-memory buffer and the ``ZipFile`` handle is
   held in a ``with`` block, so it is released on every exit path.
2. Members are processed sequentially.  A member's bytes only live inside
   :func:`_extract_member`, which bounds peak memory to roughly one member.
3. A member whose declared uncompressed size exceeds ``max_member_bytes`` is
   never decompressed; it is reported as a failure instead.
"""

from __future__ import annotations

import asyncio
import zipfile
from io import BytesIO
from typing import List, Optional

import structlog

from docextract.core.exceptions import ContainerOpenError, SizeLimitExceededError
from docextract.extraction.classifier import DOCUMENT_KINDS, classify_filename
from docextract.extraction.document import extract_document
from docextract.extraction.types import ArchiveMemberResult, ExtractionResult

__all__: list[str] = ["extract_archive", "MEMBER_FAILURE_PREFIX"]

logger = structlog.get_logger(__name__)

MEMBER_FAILURE_PREFIX: str = "Failed to process file: "


def _open_archive(content: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(BytesIO(content))
    except (zipfile.BadZipFile, OSError, ValueError) as e:
        # ValueError covers UnicodeDecodeError from UTF-8 flagged entry names.
        logger.warning("archive_open_failed", error=str(e), size_bytes=len(content))
        raise ContainerOpenError(f"Unable to open ZIP archive: {e}") from e


async def _extract_member(
    archive: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    max_member_bytes: Optional[int],
) -> ExtractionResult:
    """Extract one member, converting any failure into a failure result."""
    try:
        if max_member_bytes is not None and info.file_size > max_member_bytes:
            raise SizeLimitExceededError(
                f"Archive member is {info.file_size} bytes, "
                f"exceeding the limit of {max_member_bytes} bytes."
            )
        data = await asyncio.to_thread(archive.read, info)
        text = await extract_document(
            data, classify_filename(info.filename), filename=info.filename
        )
        return ExtractionResult.success(text)
    except Exception as e:  # noqa: BLE001 – one bad member must not sink the archive
        logger.warning(
            "archive_member_failed",
            member=info.filename,
            error=str(e),
            error_type=type(e).__name__,
        )
        return ExtractionResult.failure(f"{MEMBER_FAILURE_PREFIX}{e}")


async def extract_archive(
    content: bytes, *, max_member_bytes: Optional[int] = None
) -> List[ArchiveMemberResult]:
    """
    Extract text from every supported document inside a ZIP archive.

    Args:
        content: Raw ZIP bytes.
        max_member_bytes: Optional cap on a member's uncompressed size.

    Returns:
        One ArchiveMemberResult per qualifying member, in archive order.  An
        empty archive (or one with nothing qualifying) yields an empty list.

    Raises:
        ContainerOpenError: If the archive container itself cannot be opened.
    """
    results: List[ArchiveMemberResult] = []
    skipped = 0

    with _open_archive(content) as archive:
        entries = archive.infolist()
        logger.debug("archive_opened", entries=len(entries), size_bytes=len(content))

        for index, info in enumerate(entries):
            if info.is_dir() or classify_filename(info.filename) not in DOCUMENT_KINDS:
                skipped += 1
                continue

            result = await _extract_member(archive, info, max_member_bytes)
            logger.debug(
                "archive_member_processed",
                member=info.filename,
                member_index=index,
                ok=result.ok,
            )
            results.append(ArchiveMemberResult(name=info.filename, result=result))

    logger.info(
        "archive_extracted",
        members=len(results),
        failed=sum(1 for member in results if not member.result.ok),
        skipped=skipped,
    )
    return results
