from __future__ import annotations

import asyncio
from io import BytesIO

import structlog
from pdfminer.high_level import extract_text

from docextract.core.exceptions import UpstreamParseError

__all__: list[str] = ["extract_text_from_pdf"]

logger = structlog.get_logger(__name__)


async def extract_text_from_pdf(content: bytes) -> str:
    """
    Extract text content from PDF bytes using pdfminer.six.

    Args:
        content: Raw PDF bytes

    Returns:
        Extracted text content as a string

    Raises:
        UpstreamParseError: If pdfminer cannot parse the document.
    """

    def _worker(pdf_content: bytes) -> str:
        pdf_buffer = BytesIO(pdf_content)
        try:
            return extract_text(pdf_buffer) or ""
        except Exception as e:  # noqa: BLE001 – pdfminer raises many unrelated types
            logger.warning("pdf_parse_failed", error=str(e), error_type=type(e).__name__)
            raise UpstreamParseError(str(e) or type(e).__name__) from e

    return await asyncio.to_thread(_worker, content)
