"""
Core Custom Exceptions

Domain-specific exceptions raised by the extraction pipeline and the upload
boundary.  The API layer (`docextract.api.errors`) maps each class onto an
HTTP status and a flat JSON error body, so route handlers never build error
responses themselves.

Defined Exceptions:
- `DocumentExtractionError`: common base class.
- `NoFileError`: the request carried no ``document`` part.
- `SizeLimitExceededError`: an upload (or an archive member) is over the cap.
- `UnsupportedContentTypeError`: the declared MIME type is not accepted.
- `UnsupportedKindError`: the filename extension maps to no extractor.
- `DocumentDecodeError`: bytes cannot be interpreted as the declared kind.
- `UpstreamParseError`: the PDF/DOCX library failed on the document.
- `ContainerOpenError`: a ZIP upload cannot be opened at all.
"""

from __future__ import annotations

__all__: list[str] = [
    "DocumentExtractionError",
    "NoFileError",
    "SizeLimitExceededError",
    "UnsupportedContentTypeError",
    "UnsupportedKindError",
    "DocumentDecodeError",
    "UpstreamParseError",
    "ContainerOpenError",
]


class DocumentExtractionError(Exception):
    """Base class for every error surfaced by the extraction service."""

    pass


class NoFileError(DocumentExtractionError):
    """Raised when the upload request contains no file."""

    pass


class SizeLimitExceededError(DocumentExtractionError):
    """
    Raised when a payload is larger than the configured limit.

    Used both at the upload boundary (before any extraction runs) and for
    individual archive members whose uncompressed size is over the member cap.
    """

    pass


class UnsupportedContentTypeError(DocumentExtractionError):
    """Raised when the declared content type of an upload is not accepted."""

    pass


class UnsupportedKindError(DocumentExtractionError):
    """Raised when a document's extension maps to no text extractor."""

    pass


class DocumentDecodeError(DocumentExtractionError):
    """Raised when document bytes are not valid for their declared kind."""

    pass


class UpstreamParseError(DocumentExtractionError):
    """Raised when a third-party parser fails; carries its message verbatim."""

    pass


class ContainerOpenError(DocumentExtractionError):
    """Raised when a ZIP archive cannot be opened (corrupt or not a zip)."""

    pass
