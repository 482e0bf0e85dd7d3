"""docextract/extraction/classifier.py
###############################################################################
Format classification by filename extension
###############################################################################
The kind of an upload (or archive member) is a pure function of the lowercased
extension of its name.  Archive member names always use ``/`` separators, so
the suffix is computed on a POSIX path regardless of the host OS.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Dict, Final, Optional

from docextract.extraction.types import DocumentKind

__all__: list[str] = ["classify_filename", "file_extension", "DOCUMENT_KINDS"]

DOCUMENT_KINDS: Final[frozenset[DocumentKind]] = frozenset(
    {DocumentKind.PDF, DocumentKind.DOCX, DocumentKind.TXT}
)

_KIND_BY_EXTENSION: Final[Dict[str, DocumentKind]] = {
    f".{kind.value}": kind for kind in DocumentKind
}


def file_extension(name: str) -> str:
    """Return the lowercased extension of **name** including the dot, or ``""``."""
    return PurePosixPath(name.replace("\\", "/")).suffix.lower()


def classify_filename(name: str) -> Optional[DocumentKind]:
    """
    Map a filename to its document kind.

    Args:
        name: Upload filename or archive entry name.

    Returns:
        The matching DocumentKind, or None when the extension is unsupported
        (callers decide whether that is an error).
    """
    return _KIND_BY_EXTENSION.get(file_extension(name))
