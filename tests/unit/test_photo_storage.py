from __future__ import annotations

from pathlib import Path

import pytest

from instructor_reviews.core.exceptions import InvalidArgumentException, PayloadTooLargeException
from instructor_reviews.services.photo_storage import PhotoStorage, sanitize_filename


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("monet.jpg", "monet.jpg"),
        ("../../etc/passwd", "passwd"),
        ("my photo (1).png", "my-photo-1-.png"),
        ("", "photo"),
        (None, "photo"),
        ("...", "photo"),
    ],
)
def test_sanitize_filename(filename: str | None, expected: str) -> None:
    assert sanitize_filename(filename) == expected


@pytest.mark.asyncio
async def test_upload_writes_file_and_returns_public_url(tmp_path: Path) -> None:
    storage = PhotoStorage(str(tmp_path), "https://cdn.example.com/photos", max_bytes=100)

    url = await storage.upload("monet.jpg", b"\xff\xd8jpeg", "image/jpeg")

    assert url.startswith("https://cdn.example.com/photos/pending/")
    assert url.endswith("-monet.jpg")
    relative = url[len("https://cdn.example.com/photos/"):]
    assert (tmp_path / relative).read_bytes() == b"\xff\xd8jpeg"


@pytest.mark.asyncio
async def test_upload_rejects_non_images(tmp_path: Path) -> None:
    storage = PhotoStorage(str(tmp_path), "/photos/", max_bytes=100)

    with pytest.raises(InvalidArgumentException):
        await storage.upload("notes.txt", b"hello", "text/plain")
    with pytest.raises(InvalidArgumentException):
        await storage.upload("blob", b"hello", None)

    assert not (tmp_path / "pending").exists()


@pytest.mark.asyncio
async def test_upload_rejects_empty_and_oversized(tmp_path: Path) -> None:
    storage = PhotoStorage(str(tmp_path), "/photos/", max_bytes=4)

    with pytest.raises(InvalidArgumentException):
        await storage.upload("a.png", b"", "image/png")
    with pytest.raises(PayloadTooLargeException):
        await storage.upload("a.png", b"12345", "image/png")
