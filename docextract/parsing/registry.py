"""
Parser Registry

Maps the lowercase extension of every *single-document* kind to the coroutine
that turns its bytes into text.  ZIP is deliberately absent: archives are
handled by :mod:`docextract.extraction.archive`, never by a parser.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, Final

from .docx import extract_text_from_docx
from .pdf import extract_text_from_pdf
from .txt import read_txt

__all__: list[str] = [
    "TEXT_EXTRACTORS",
]

# Dispatch table – lowercase extension → async text extraction function.
TEXT_EXTRACTORS: Final[Dict[str, Callable[[bytes], Awaitable[str]]]] = {
    "pdf": extract_text_from_pdf,
    "docx": extract_text_from_docx,
    "txt": read_txt,
}
