"""multipart/form-data writer over a binary buffer."""

import os
import re
from typing import BinaryIO

from payload.core.settings import settings

# RFC 2046 boundary alphabet, space only allowed before the last character
_BOUNDARY_RE = re.compile(r"[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]")
# tspecials that force the boundary parameter to be quoted
_TSPECIALS_RE = re.compile(r"[()<>@,;:\\\"/\[\]?= ]")


class MultipartWriterError(Exception):
    """Writer used out of order: superseded part, or writer already closed."""


def choose_boundary() -> str:
    """Random boundary token, 60 hex characters."""
    return os.urandom(30).hex()


def escape_quotes(value: str) -> str:
    """Escape a Content-Disposition parameter; CR and LF are percent-encoded so they cannot end the header."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return escaped.replace("\r", "%0D").replace("\n", "%0A")


class PartWriter:
    """Writable view on the part the writer is currently filling."""

    __slots__ = ("_writer",)

    def __init__(self, writer: "MultipartWriter") -> None:
        self._writer = writer

    def write(self, data: bytes) -> int:
        if self._writer.current_part is not self:
            raise MultipartWriterError("part is no longer writable")
        return self._writer.buffer.write(data)


class MultipartWriter:
    """Write form-data parts sequentially into ``buffer``.

    Must be closed to terminate the body with the closing boundary; use it as
    a context manager so that happens on every exit path.
    """

    def __init__(self, buffer: BinaryIO, boundary: str | None = None) -> None:
        if boundary is not None and not _BOUNDARY_RE.fullmatch(boundary):
            raise ValueError(f"invalid multipart boundary: {boundary!r}")
        self.buffer = buffer
        self._boundary = boundary or choose_boundary()
        self._current: PartWriter | None = None
        self._parts = 0
        self._closed = False

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def content_type(self) -> str:
        if _TSPECIALS_RE.search(self._boundary):
            return f'multipart/form-data; boundary="{self._boundary}"'
        return f"multipart/form-data; boundary={self._boundary}"

    @property
    def current_part(self) -> PartWriter | None:
        return self._current

    @property
    def closed(self) -> bool:
        return self._closed

    def create_part(self, headers: dict[str, str]) -> PartWriter:
        """Start a new part with the given headers; the previous part is finished."""
        if self._closed:
            raise MultipartWriterError("writer is closed")

        delimiter = f"\r\n--{self._boundary}\r\n" if self._parts else f"--{self._boundary}\r\n"
        head = "".join(f"{key}: {headers[key]}\r\n" for key in sorted(headers))
        self.buffer.write(f"{delimiter}{head}\r\n".encode(settings.TEXT_ENCODING))

        self._parts += 1
        self._current = PartWriter(self)
        return self._current

    def create_form_file(self, fieldname: str, filename: str) -> PartWriter:
        disposition = f'form-data; name="{escape_quotes(fieldname)}"; filename="{escape_quotes(filename)}"'
        return self.create_part({
            "Content-Disposition": disposition,
            "Content-Type": settings.MULTIPART_FILE_CONTENT_TYPE,
        })

    def create_form_field(self, fieldname: str) -> PartWriter:
        return self.create_part({"Content-Disposition": f'form-data; name="{escape_quotes(fieldname)}"'})

    def write_field(self, fieldname: str, value: str) -> None:
        self.create_form_field(fieldname).write(value.encode(settings.TEXT_ENCODING))

    def close(self) -> None:
        """Write the closing boundary. Later calls do nothing."""
        if self._closed:
            return
        prefix = "\r\n" if self._parts else ""
        self.buffer.write(f"{prefix}--{self._boundary}--\r\n".encode(settings.TEXT_ENCODING))
        self._current = None
        self._closed = True

    def __enter__(self) -> "MultipartWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
