from __future__ import annotations

from typing import Optional

import structlog

from docextract.core.exceptions import UnsupportedKindError
from docextract.extraction.classifier import DOCUMENT_KINDS, file_extension
from docextract.extraction.types import DocumentKind
from docextract.parsing.registry import TEXT_EXTRACTORS

__all__: list[str] = ["extract_document"]

logger = structlog.get_logger(__name__)


async def extract_document(
    content: bytes, kind: Optional[DocumentKind], *, filename: str = ""
) -> str:
    """
    Extract the full text of a single (non-archive) document.

    Args:
        content: Raw document bytes.
        kind: Classified kind; ``None`` means the extension is unsupported.
        filename: Original name, used for error messages and logging only.

    Returns:
        The extracted text.  There are no partial results: either the whole
        document is converted or an exception is raised.

    Raises:
        UnsupportedKindError: For ``None`` and for ZIP, which belongs to the
            archive extractor.
        DocumentDecodeError: If a TXT document is not valid UTF-8.
        UpstreamParseError: If the PDF/DOCX parser fails.
    """
    if kind is None or kind not in DOCUMENT_KINDS:
        extension = file_extension(filename) or "(none)"
        logger.info("document_kind_unsupported", filename=filename, extension=extension)
        raise UnsupportedKindError(f"Unsupported file type: {extension}")

    extractor = TEXT_EXTRACTORS[kind.value]
    text = await extractor(content)
    logger.debug(
        "document_extracted",
        filename=filename,
        kind=kind.value,
        size_bytes=len(content),
        characters=len(text),
    )
    return text
