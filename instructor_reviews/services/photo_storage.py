"""
Photo storage service.
Stores instructor photos on disk and hands back their public URL.
"""
import re
import time
from pathlib import Path
from typing import Optional

from starlette.concurrency import run_in_threadpool

from instructor_reviews.core.exceptions import (
    InvalidArgumentException,
    PayloadTooLargeException,
    StoreException,
)
from instructor_reviews.core.logging import log_error, logger

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def sanitize_filename(filename: Optional[str]) -> str:
    """
    Reduce an uploaded file name to a safe basename.

    Path separators and anything outside [A-Za-z0-9._-] become dashes;
    an empty result falls back to "photo".
    """
    base = Path(filename or "").name
    cleaned = _UNSAFE_CHARS.sub("-", base).strip(".-")
    return cleaned or "photo"


class PhotoStorage:
    """
    Blob storage for instructor photos.

    New uploads land under pending/<epoch-millis>-<name> inside the storage
    directory; the public URL is the configured base URL plus that path.
    """

    PREFIX = "pending"

    def __init__(self, directory: str, public_base_url: str, max_bytes: int):
        self.directory = Path(directory)
        self.public_base_url = public_base_url if public_base_url.endswith("/") else public_base_url + "/"
        self.max_bytes = max_bytes

    def _validate(self, content: bytes, content_type: Optional[str]) -> None:
        if not content_type or not content_type.startswith("image/"):
            raise InvalidArgumentException(
                "Only image uploads are accepted",
                details={"content_type": content_type},
            )
        if not content:
            raise InvalidArgumentException("Uploaded photo is empty")
        if len(content) > self.max_bytes:
            raise PayloadTooLargeException(
                "Photo is too large",
                details={"max_bytes": self.max_bytes, "received_bytes": len(content)},
            )

    async def upload(self, filename: Optional[str], content: bytes, content_type: Optional[str]) -> str:
        """
        Store a photo and return its public URL.

        Raises:
            InvalidArgumentException: Not an image, or empty
            PayloadTooLargeException: Larger than max_bytes
            StoreException: Writing to storage failed
        """
        self._validate(content, content_type)

        relative = f"{self.PREFIX}/{int(time.time() * 1000)}-{sanitize_filename(filename)}"
        target = self.directory / relative

        try:
            await run_in_threadpool(target.parent.mkdir, parents=True, exist_ok=True)
            await run_in_threadpool(target.write_bytes, content)
        except OSError as e:
            log_error("Failed to store photo", e, path=str(target))
            raise StoreException(f"Photo upload failed: {str(e)}")

        logger.info(
            "Photo stored",
            extra={"path": str(target), "size_bytes": len(content)},
        )

        return self.public_base_url + relative
