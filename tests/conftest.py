# ruff: noqa: E402
from __future__ import annotations

import sys
from pathlib import Path

# Ensure repository root is first on sys.path
_repo_root: Path = Path(__file__).resolve().parent.parent  # tests/ -> repo root
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import zipfile
from io import BytesIO
from typing import Callable, Iterable, Optional, Set, Tuple

import pytest

_DOCX_XML_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    "<w:body>{paragraphs}</w:body></w:document>"
)


class MockSettings:  # Does NOT inherit from real Settings
    """Mock Settings class for testing."""

    debug: bool = False
    commit_sha: Optional[str] = None
    prometheus_enabled: bool = False

    host: str = "127.0.0.1"
    port: int = 4000

    max_file_size_mb: int = 50
    max_member_size_mb: int = 50
    allowed_content_types: Set[str] = {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "application/zip",
        "application/x-zip-compressed",
    }

    def __init__(self, **kwargs):
        """Initialize with optional overrides for any attribute."""
        for key, value in self.__class__.__dict__.items():
            if not key.startswith("__") and not callable(value):
                setattr(self, key, value)
        # Copy the class-level set so tests can mutate it safely.
        self.allowed_content_types = set(self.allowed_content_types)

        for key, value in kwargs.items():
            setattr(self, key, value)

    def is_content_type_allowed(self, content_type: Optional[str]) -> bool:
        """Check if a declared content type is accepted."""
        if not content_type:
            return False
        return content_type.split(";", 1)[0].strip().lower() in self.allowed_content_types


@pytest.fixture
def mock_settings():
    """Provide a plain MockSettings instance. Integration clients inject it via app.dependency_overrides."""
    yield MockSettings()


@pytest.fixture(autouse=True)
def _disable_dotenv(monkeypatch):
    """Prevent the application Settings class from reading the developer *.env* file.

    Unit-tests must operate against a *clean* environment; individual tests
    remain free to set variables via ``monkeypatch``.
    """

    from docextract.core.config import Settings  # Imported here to avoid circularity

    monkeypatch.setitem(Settings.model_config, "env_file", None)
    monkeypatch.delenv("ALLOWED_CONTENT_TYPES", raising=False)
    monkeypatch.delenv("MAX_FILE_SIZE_MB", raising=False)
    monkeypatch.delenv("MAX_MEMBER_SIZE_MB", raising=False)


def make_zip(entries: Iterable[Tuple[str, bytes | None]]) -> bytes:
    """Build a ZIP archive in memory.

    Each entry is ``(name, data)``; ``data=None`` creates a directory entry
    (``name`` should then end with ``/``).  Entries are written in the given
    order, which is the archive's native enumeration order.
    """

    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, data in entries:
            if data is None:
                archive.writestr(zipfile.ZipInfo(name), b"")
            else:
                archive.writestr(name, data)
    return buffer.getvalue()


def make_zip_with_invalid_utf8_name() -> bytes:
    """Build a one-entry ZIP whose central-directory name claims UTF-8 but is not.

    The general-purpose flag gets bit 0x800 set and the first name bytes are
    replaced with ``\\xff\\xfe\\xfd``, so opening the archive fails while
    decoding the entry name.
    """

    data = bytearray(make_zip([("abc.txt", b"hi")]))
    central = data.rindex(b"PK\x01\x02")
    flags = int.from_bytes(data[central + 8 : central + 10], "little") | 0x800
    data[central + 8 : central + 10] = flags.to_bytes(2, "little")
    data[central + 46 : central + 49] = b"\xff\xfe\xfd"
    return bytes(data)


def make_docx(*paragraphs: str) -> bytes:
    """Build a minimal DOCX package containing **paragraphs** as body text."""

    body = "".join(f"<w:p><w:r><w:t>{text}</w:t></w:r></w:p>" for text in paragraphs)
    return make_zip(
        [("word/document.xml", _DOCX_XML_TEMPLATE.format(paragraphs=body).encode())]
    )


@pytest.fixture
def zip_factory() -> Callable[[Iterable[Tuple[str, bytes | None]]], bytes]:
    return make_zip


@pytest.fixture
def docx_factory() -> Callable[..., bytes]:
    return make_docx
