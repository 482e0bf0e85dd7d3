"""docextract/parsing/docx.py
###############################################################################
DOCX text extraction using docx2txt
###############################################################################
docx2txt works in raw-text mode: paragraph, tab and line-break markup become
whitespace, every other formatting detail is dropped.  The document is read
straight from an in-memory buffer, so no temporary file is created.
"""

from __future__ import annotations

import asyncio
from io import BytesIO

import docx2txt
import structlog

from docextract.core.exceptions import UpstreamParseError

__all__: list[str] = ["extract_text_from_docx"]

logger = structlog.get_logger(__name__)


async def extract_text_from_docx(content: bytes) -> str:
    """
    Extract text content from DOCX bytes using docx2txt.

    Args:
        content: Raw DOCX bytes

    Returns:
        Extracted text content as a string

    Raises:
        UpstreamParseError: If the bytes are not a readable DOCX package.
    """

    def _worker(docx_content: bytes) -> str:
        try:
            return docx2txt.process(BytesIO(docx_content)) or ""
        except Exception as e:  # noqa: BLE001 – zipfile/KeyError/XML errors alike
            logger.warning(
                "docx_parse_failed", error=str(e), error_type=type(e).__name__
            )
            raise UpstreamParseError(str(e) or type(e).__name__) from e

    # Run CPU-bound extraction in threadpool
    return await asyncio.to_thread(_worker, content)
