"""Streaming artifact upload with progress reporting."""

import asyncio
import io
import logging
import mimetypes
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, Field

from castpress.config.schema import Region
from castpress.publish.store import ObjectStore, S3ObjectStore
from castpress.utils.errors import StorageIOError, UploadError
from castpress.utils.paths import AUDIO_EXTENSION

logger = logging.getLogger(__name__)

MPEG_AUDIO = "audio/mpeg"
OCTET_STREAM = "application/octet-stream"
DEFAULT_CHUNK_SIZE = 64 * 1024

ProgressCallback = Callable[[int], None]
"""Called with the cumulative number of bytes transferred so far."""


def resolve_content_type(key: str) -> str:
    """Content type for an object key, guessed from its extension.

    Falls back to ``audio/mpeg`` for ``.mp3`` keys and
    ``application/octet-stream`` for everything else.
    """
    guessed, _ = mimetypes.guess_type(key)
    if guessed:
        return guessed
    if key.lower().endswith(AUDIO_EXTENSION):
        return MPEG_AUDIO
    return OCTET_STREAM


class UploadTarget(BaseModel):
    """Bucket and key an artifact is uploaded to."""

    bucket: str
    key: str

    @property
    def filename(self) -> str:
        return self.key.rsplit("/", 1)[-1]


class UploadResult(BaseModel):
    """Outcome of a successful upload."""

    url: str
    key: str
    bytes: int = Field(ge=0)
    content_type: str


class ProgressReader(io.RawIOBase):
    """Read-only stream that hands out a source in bounded chunks.

    No single read returns more than ``chunk_size`` bytes or goes past
    ``length``, so memory use is independent of the artifact size. After
    every non-empty read the progress callback receives the running total.
    """

    def __init__(
        self,
        source: BinaryIO,
        length: int,
        progress_callback: ProgressCallback | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        super().__init__()
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._source = source
        self.length = length
        self.chunk_size = chunk_size
        self.transferred = 0
        self._progress_callback = progress_callback

    def readable(self) -> bool:
        return True

    def read(self, size: int | None = -1) -> bytes:
        remaining = self.length - self.transferred
        if remaining <= 0:
            return b""

        if size is None or size < 0 or size > self.chunk_size:
            size = self.chunk_size
        chunk = self._source.read(min(size, remaining))
        if not chunk:
            return b""

        self.transferred += len(chunk)
        if self._progress_callback is not None:
            self._progress_callback(self.transferred)
        return chunk

    def readinto(self, buffer) -> int:
        chunk = self.read(len(buffer))
        buffer[: len(chunk)] = chunk
        return len(chunk)


class ArtifactPublisher:
    """Stream artifacts of known length to an object store.

    Example:
        >>> publisher = ArtifactPublisher.for_region(config.publishing.region)
        >>> with open("episode.mp3", "rb") as f:
        ...     result = await publisher.upload(f, size, UploadTarget(bucket="b", key="k.mp3"))
        >>> result.url
        'https://b.nyc3.digitaloceanspaces.com/k.mp3'
    """

    def __init__(self, store: ObjectStore, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.store = store
        self.chunk_size = chunk_size

    @classmethod
    def for_region(cls, region: Region, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "ArtifactPublisher":
        """Publisher backed by an S3-compatible store in ``region``."""
        return cls(S3ObjectStore(region), chunk_size=chunk_size)

    async def upload(
        self,
        source: BinaryIO,
        length: int,
        target: UploadTarget,
        progress_callback: ProgressCallback | None = None,
    ) -> UploadResult:
        """Upload ``length`` bytes from ``source`` as a public object.

        The blocking store call runs in a worker thread; the progress
        callback is invoked from that thread.

        Raises:
            UploadError: If the store rejects the request, the transfer
                fails, or the source ends before ``length`` bytes
        """
        content_type = resolve_content_type(target.key)
        reader = ProgressReader(
            source,
            length,
            progress_callback=progress_callback,
            chunk_size=self.chunk_size,
        )

        logger.info(
            "Uploading %s (%d bytes, %s) to bucket %s",
            target.key,
            length,
            content_type,
            target.bucket,
        )

        try:
            url = await asyncio.to_thread(
                self.store.put, target.bucket, target.key, reader, length, content_type
            )
        except Exception as e:
            raise UploadError(
                f"Failed to upload {target.key} to bucket {target.bucket}: {e}"
            ) from e

        if reader.transferred != length:
            raise UploadError(
                f"Upload of {target.key} sent {reader.transferred} of {length} bytes"
            )

        logger.info("Uploaded %s", url)
        return UploadResult(
            url=url, key=target.key, bytes=length, content_type=content_type
        )

    async def upload_file(
        self,
        path: Path,
        target: UploadTarget,
        progress_callback: ProgressCallback | None = None,
    ) -> UploadResult:
        """Upload a local file, streaming it from disk.

        Raises:
            StorageIOError: If the file can't be opened
            UploadError: If the upload fails
        """
        try:
            source = open(path, "rb")
        except OSError as e:
            raise StorageIOError(f"Failed to open {path}: {e}") from e

        with source:
            try:
                length = path.stat().st_size
            except OSError as e:
                raise StorageIOError(f"Failed to stat {path}: {e}") from e
            return await self.upload(source, length, target, progress_callback)

    async def upload_bytes(
        self,
        data: bytes,
        target: UploadTarget,
        progress_callback: ProgressCallback | None = None,
    ) -> UploadResult:
        """Upload an in-memory document such as the rendered feed."""
        return await self.upload(io.BytesIO(data), len(data), target, progress_callback)
