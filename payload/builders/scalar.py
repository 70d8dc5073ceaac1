"""Constructors for raw text, bytes, stream and file bodies."""

import io
import mimetypes
import os
import sys
from typing import IO, Any

from beartype import beartype

from payload.core.exceptions import FileOpenError
from payload.core.logger import LogIcon, logger
from payload.core.settings import settings
from payload.models.core import Payload


@beartype
def new_string_payload(text: str) -> Payload:
    return Payload(stream=io.BytesIO(text.encode(settings.TEXT_ENCODING)))


@beartype
def new_bytes_payload(data: bytes | bytearray | memoryview) -> Payload:
    return Payload(stream=io.BytesIO(bytes(data)))


def new_stream_payload(stream: IO[Any]) -> Payload:
    """Wrap a caller-owned stream without buffering. The caller keeps closing it."""
    return Payload(stream=stream)


def guess_content_type(path: str | os.PathLike) -> str | None:
    """Best-effort media type from the file extension."""
    if sys.version_info >= (3, 13):
        return mimetypes.guess_file_type(path)[0]
    return mimetypes.guess_type(os.fspath(path))[0]


@beartype
def new_file_payload(path: str | os.PathLike) -> Payload:
    """Open ``path`` for reading; the payload owns the file until released.

    Raises:
        FileOpenError: the file cannot be opened.
    """
    try:
        handle = open(path, "rb")  # noqa: SIM115
    except OSError as err:
        logger.warning("File payload open failed", icon=LogIcon.FILE, path=os.fspath(path), error=str(err))
        raise FileOpenError(path, err) from err

    content_type = guess_content_type(path)
    logger.info("File payload ready", icon=LogIcon.FILE, path=os.fspath(path), content_type=content_type)
    return Payload(stream=handle, content_type=content_type, releaser=handle)
