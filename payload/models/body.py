"""Explicit body variants for callers that name the shape instead of relying on classification."""

import os
from collections.abc import Sequence
from dataclasses import dataclass, field, is_dataclass
from typing import IO, Any

from pydantic import BaseModel

from payload.models.core import UploadFile
from payload.models.form import FormValues


@dataclass(frozen=True, slots=True)
class TextBody:
    text: str


@dataclass(frozen=True, slots=True)
class BytesBody:
    data: bytes


@dataclass(frozen=True, slots=True)
class StreamBody:
    """Caller-owned stream, sent without buffering."""

    stream: IO[Any]


@dataclass(frozen=True, slots=True)
class FileBody:
    path: str | os.PathLike


@dataclass(frozen=True, slots=True)
class RecordBody:
    """Pydantic model or dataclass instance sent as JSON."""

    record: Any


@dataclass(frozen=True, slots=True)
class FormBody:
    form: FormValues | dict[str, str] | dict[str, list[str]]


@dataclass(frozen=True, slots=True)
class MultipartBody:
    files: Sequence[UploadFile] = field(default_factory=tuple)
    form: FormValues | dict[str, str] | dict[str, list[str]] | None = None


type Body = TextBody | BytesBody | StreamBody | FileBody | RecordBody | FormBody | MultipartBody


def is_record(value: Any) -> bool:
    """Whether the value opted into JSON encoding as a pydantic model or dataclass instance."""
    if isinstance(value, type):
        return False
    return isinstance(value, BaseModel) or is_dataclass(value)
