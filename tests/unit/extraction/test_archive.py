from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from docextract.core.exceptions import ContainerOpenError
from docextract.extraction.archive import MEMBER_FAILURE_PREFIX, extract_archive
from tests.conftest import make_docx, make_zip, make_zip_with_invalid_utf8_name


@pytest.mark.asyncio
async def test_bundle_scenario_reports_members_in_order() -> None:
    """Directory skipped, text extracted, corrupt PDF isolated."""
    archive = make_zip(
        [
            ("a.txt", b"hi"),
            ("b.pdf", b"this is definitely not a pdf document"),
            ("docs/", None),
        ]
    )

    results = await extract_archive(archive)

    assert [member.name for member in results] == ["a.txt", "b.pdf"]
    assert results[0].result.ok
    assert results[0].result.text == "hi"
    assert not results[1].result.ok
    assert results[1].result.error.startswith(MEMBER_FAILURE_PREFIX)


@pytest.mark.asyncio
async def test_non_qualifying_entries_are_skipped_silently() -> None:
    archive = make_zip(
        [
            ("images/", None),
            ("images/logo.png", b"\x89PNG"),
            ("nested.zip", make_zip([("inner.txt", b"never read")])),
            ("legacy.doc", b"\xd0\xcf\x11\xe0"),
            ("README", b"no extension"),
            ("notes/readme.TXT", b"kept"),
        ]
    )

    results = await extract_archive(archive)

    assert [(m.name, m.result.text) for m in results] == [("notes/readme.TXT", "kept")]


@pytest.mark.asyncio
async def test_result_count_matches_qualifying_entries() -> None:
    entries = [
        ("one.txt", b"1"),
        ("folder/", None),
        ("two.docx", make_docx("two")),
        ("skip.csv", b"a,b"),
        ("three.txt", b"3"),
    ]

    results = await extract_archive(make_zip(entries))

    assert len(results) == 3
    assert [m.name for m in results] == ["one.txt", "two.docx", "three.txt"]
    assert all(m.result.ok for m in results)
    assert "two" in results[1].result.text


@pytest.mark.asyncio
async def test_native_order_is_preserved_not_sorted() -> None:
    names = ["z.txt", "a.txt", "m/b.txt", "c.txt"]
    archive = make_zip([(name, name.encode()) for name in names])

    results = await extract_archive(archive)

    assert [m.name for m in results] == names
    assert [m.result.text for m in results] == names


@pytest.mark.asyncio
async def test_one_corrupt_member_does_not_sink_the_others() -> None:
    entries = [(f"doc{i}.txt", f"body {i}".encode()) for i in range(5)]
    entries[2] = ("doc2.txt", b"\xff\xfe not utf-8 \xa3")

    results = await extract_archive(make_zip(entries))

    assert len(results) == 5
    failures = [m for m in results if not m.result.ok]
    assert [m.name for m in failures] == ["doc2.txt"]
    assert "not valid UTF-8" in failures[0].result.error
    assert [m.result.text for m in results if m.result.ok] == [
        "body 0",
        "body 1",
        "body 3",
        "body 4",
    ]


@pytest.mark.asyncio
async def test_unexpected_exception_is_captured_per_member() -> None:
    archive = make_zip([("a.txt", b"a"), ("b.txt", b"b"), ("c.txt", b"c")])
    real_outputs = {"a.txt": "a", "c.txt": "c"}

    async def _fake_extract(content, kind, *, filename=""):
        if filename == "b.txt":
            raise RuntimeError("parser exploded")
        return real_outputs[filename]

    with patch(
        "docextract.extraction.archive.extract_document",
        new=AsyncMock(side_effect=_fake_extract),
    ):
        results = await extract_archive(archive)

    assert [m.result.ok for m in results] == [True, False, True]
    assert results[1].result.error == f"{MEMBER_FAILURE_PREFIX}parser exploded"


@pytest.mark.asyncio
async def test_oversized_member_fails_without_being_read() -> None:
    archive = make_zip([("small.txt", b"ok"), ("big.txt", b"x" * 2048)])

    with patch(
        "docextract.extraction.archive.extract_document",
        new=AsyncMock(return_value="ok"),
    ) as mock_extract:
        results = await extract_archive(archive, max_member_bytes=1024)

    assert results[0].result.ok
    assert not results[1].result.ok
    assert "exceeding the limit of 1024 bytes" in results[1].result.error
    mock_extract.assert_awaited_once()


@pytest.mark.asyncio
async def test_member_exactly_at_limit_is_extracted() -> None:
    archive = make_zip([("edge.txt", b"y" * 1024)])

    results = await extract_archive(archive, max_member_bytes=1024)

    assert results[0].result.text == "y" * 1024


@pytest.mark.asyncio
async def test_empty_archive_returns_empty_list() -> None:
    assert await extract_archive(make_zip([])) == []


@pytest.mark.asyncio
async def test_archive_with_only_skipped_entries_returns_empty_list() -> None:
    archive = make_zip([("dir/", None), ("photo.jpg", b"\xff\xd8\xff")])
    assert await extract_archive(archive) == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        b"",
        b"not a zip at all",
        b"PK\x03\x04truncated",
        make_zip_with_invalid_utf8_name(),
    ],
    ids=["empty", "garbage", "truncated", "invalid-utf8-entry-name"],
)
async def test_unreadable_container_raises(payload: bytes) -> None:
    with pytest.raises(ContainerOpenError) as exc:
        await extract_archive(payload)

    assert "Unable to open ZIP archive" in str(exc.value)


@pytest.mark.asyncio
async def test_archive_handle_is_closed_when_a_member_raises_unexpectedly() -> None:
    """Errors escaping the per-member guard still release the archive."""
    archive = make_zip([("a.txt", b"a")])
    opened = []

    from docextract.extraction import archive as archive_module

    real_open = archive_module._open_archive

    def _tracking_open(content: bytes):
        handle = real_open(content)
        opened.append(handle)
        return handle

    with (
        patch.object(archive_module, "_open_archive", side_effect=_tracking_open),
        patch.object(
            archive_module,
            "_extract_member",
            new=AsyncMock(side_effect=RuntimeError("escaped")),
        ),
    ):
        with pytest.raises(RuntimeError, match="escaped"):
            await extract_archive(archive)

    assert len(opened) == 1
    assert opened[0].fp is None  # ZipFile.close() drops the file pointer
