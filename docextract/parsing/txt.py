from __future__ import annotations

from docextract.core.exceptions import DocumentDecodeError

__all__: list[str] = ["read_txt"]


async def read_txt(content: bytes) -> str:
    """
    Decode plain-text bytes as UTF-8, verbatim.

    Args:
        content: Raw bytes of the text document.

    Returns:
        The decoded text.

    Raises:
        DocumentDecodeError: If the bytes are not valid UTF-8.  Invalid input
            is rejected rather than patched with replacement characters.
    """
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(f"File is not valid UTF-8 text: {e}") from e
