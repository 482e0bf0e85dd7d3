from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__: list[str] = ["DocumentKind", "ExtractionResult", "ArchiveMemberResult"]


class DocumentKind(str, Enum):
    """Document formats the service knows how to handle."""

    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"
    ZIP = "zip"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of extracting one document: either text or an error message.

    Attributes:
        text: Extracted text when extraction succeeded, otherwise None
        error: Failure message when extraction failed, otherwise None
    """

    text: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "ExtractionResult":
        return cls(text=text)

    @classmethod
    def failure(cls, message: str) -> "ExtractionResult":
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ArchiveMemberResult:
    """
    Extraction outcome for a single archive entry.

    Attributes:
        name: Entry name exactly as stored in the archive (may contain folders)
        result: What extracting that entry produced
    """

    name: str
    result: ExtractionResult
