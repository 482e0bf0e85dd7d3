"""docextract/api/schemas.py
###############################################################################
Public Pydantic models **exposed by the API layer**.
###############################################################################
The internal pipeline works with plain dataclasses
(:mod:`docextract.extraction.types`); these models are the JSON contract seen
by clients.  Optional fields are left out of responses entirely
(``exclude_none``), so a document upload carries ``content`` and an archive
upload carries ``files``, never both.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from docextract.extraction.types import ArchiveMemberResult

__all__: list[str] = [
    "MemberResultSchema",
    "UploadResponse",
]


class MemberResultSchema(BaseModel):
    """Extraction outcome of one archive member."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Entry name as stored in the archive.")
    success: bool = Field(..., description="Whether this member was extracted.")
    content: Optional[str] = Field(
        default=None, description="Extracted text (successful members only)."
    )
    error: Optional[str] = Field(
        default=None, description="Failure message (failed members only)."
    )

    @classmethod
    def from_member(cls, member: ArchiveMemberResult) -> "MemberResultSchema":
        return cls(
            name=member.name,
            success=member.result.ok,
            content=member.result.text,
            error=member.result.error,
        )


class UploadResponse(BaseModel):
    """Successful response of ``POST /upload``.

    Exactly one of ``content`` (single documents) and ``files`` (ZIP
    archives) is populated.
    """

    model_config = ConfigDict(frozen=True)

    success: bool = True
    filename: str = Field(..., description="Original filename of the upload.")
    content: Optional[str] = Field(
        default=None, description="Extracted text of a single document."
    )
    files: Optional[List[MemberResultSchema]] = Field(
        default=None, description="Per-member results, in archive order."
    )

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON body, omitting whichever of content/files is unset."""
        return self.model_dump(exclude_none=True)
