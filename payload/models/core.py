"""Core models for request body construction."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from pathlib import PurePath
from typing import IO, Any, Protocol

from payload.core.settings import settings


class BodyType(StrEnum):
    """Body shape classification for payload construction."""

    EMPTY = "empty"
    PAYLOAD = "payload"
    TEXT = "text"
    BYTES = "bytes"
    FORM = "form"
    FILE = "file"
    STREAM = "stream"
    RECORD = "record"
    MULTIPART = "multipart"


class Releaser(Protocol):
    """System resource owned by a payload."""

    def close(self) -> None: ...


class Payload:
    """Normalized request body: a single-pass byte stream plus an optional content type.

    The consumer reads the stream once, sets the request content type from
    ``content_type`` when present, and calls ``release()`` afterwards.
    """

    __slots__ = ("_stream", "_content_type", "_releaser", "_released")

    def __init__(
        self,
        stream: IO[Any] | None = None,
        content_type: str | None = None,
        releaser: Releaser | None = None,
    ) -> None:
        self._stream = stream
        self._content_type = content_type or None
        self._releaser = releaser
        self._released = False

    @property
    def stream(self) -> IO[Any] | None:
        return self._stream

    @property
    def content_type(self) -> str | None:
        return self._content_type

    @property
    def releaser(self) -> Releaser | None:
        return self._releaser

    @property
    def is_empty(self) -> bool:
        return self._stream is None

    @property
    def released(self) -> bool:
        return self._released

    @property
    def headers(self) -> dict[str, str]:
        """Request headers implied by the payload."""
        return {"Content-Type": self._content_type} if self._content_type else {}

    def read(self, size: int = -1) -> bytes:
        """Read from the stream. Text chunks are encoded, the empty payload reads nothing."""
        if self._stream is None:
            return b""
        data = self._stream.read(size)
        if isinstance(data, str):
            return data.encode(settings.TEXT_ENCODING)
        return bytes(data or b"")

    def iter_chunks(self, chunk_size: int | None = None) -> Iterator[bytes]:
        """Yield chunks until the stream is exhausted."""
        chunk_size = chunk_size or settings.COPY_CHUNK_SIZE
        while chunk := self.read(chunk_size):
            yield chunk

    def release(self) -> None:
        """Release the owned resource. Only the first call has an effect."""
        if self._releaser is None or self._released:
            return
        self._released = True
        self._releaser.close()

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_chunks()

    def __enter__(self) -> "Payload":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        if self.is_empty:
            return "Payload(empty)"
        return f"Payload(stream={type(self._stream).__name__}, content_type={self._content_type!r})"


# Shared "no body" sentinel, never mutated and owns no resource
EMPTY_PAYLOAD = Payload()


@dataclass(frozen=True, slots=True)
class UploadFile:
    """File attached to a multipart payload: form field name and path on disk."""

    fieldname: str
    filename: str

    @property
    def basename(self) -> str:
        """File name written into the part, without directories."""
        return PurePath(self.filename).name
