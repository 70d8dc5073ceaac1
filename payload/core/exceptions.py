"""Error taxonomy for payload construction."""

import os
from typing import Any


def type_name(value: Any) -> str:
    """Qualified runtime type name used in error messages."""
    value_type = type(value)
    if value_type.__module__ == "builtins":
        return value_type.__qualname__
    return f"{value_type.__module__}.{value_type.__qualname__}"


class PayloadError(Exception):
    """Base exception for payload construction failures."""


class UnsupportedPayloadType(PayloadError, TypeError):
    """Programmer error: the value has no matching payload constructor."""

    def __init__(self, value: Any) -> None:
        self.value_type = type(value)
        super().__init__(f"unsupported payload type: {type_name(value)}")


class UnsupportedFormShape(PayloadError, TypeError):
    """Programmer error: the value cannot be normalized into form values."""

    def __init__(self, value: Any) -> None:
        self.value_type = type(value)
        super().__init__(f"unable to convert type {type_name(value)} to form values")


class FileOpenError(PayloadError, OSError):
    """A file could not be opened or read. Keeps errno and strerror of the cause."""

    def __init__(self, path: str | os.PathLike, err: OSError) -> None:
        self.path = os.fspath(path)
        super().__init__(err.errno, err.strerror or str(err), self.path)


class UploadFileError(FileOpenError):
    """A multipart upload file could not be opened or read."""


class SerializationError(PayloadError, ValueError):
    """The record cannot be encoded as JSON."""

    def __init__(self, record: Any, err: Exception) -> None:
        self.record_type = type(record)
        super().__init__(f"unable to serialize {type_name(record)}: {err}")
