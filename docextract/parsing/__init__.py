"""docextract/parsing/__init__.py
###############################################################################
Parsing Package Root
###############################################################################
File-type specific text-extraction helpers.  Each helper takes the raw bytes
of one document and MUST:

1. Never block the event-loop – CPU-bound work is off-loaded via
   `asyncio.to_thread()`.
2. Raise a `DocumentExtractionError` subclass on failure
   (`UpstreamParseError`, `DocumentDecodeError`); there is no partial output.
3. Return *raw* text without cleaning or normalisation.

The dispatch table lives in :py:mod:`docextract.parsing.registry`.
"""

from __future__ import annotations

from .docx import extract_text_from_docx
from .pdf import extract_text_from_pdf
from .txt import read_txt

__all__: list[str] = [
    "extract_text_from_pdf",
    "extract_text_from_docx",
    "read_txt",
]
