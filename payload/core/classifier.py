"""Route an arbitrary body value to the constructor for its shape."""

import os
from collections.abc import Callable
from typing import Any

from payload.builders.form import new_form_payload
from payload.builders.multipart import new_multipart_payload
from payload.builders.record import new_json_payload
from payload.builders.scalar import new_bytes_payload, new_file_payload, new_stream_payload, new_string_payload
from payload.core.exceptions import UnsupportedPayloadType
from payload.core.logger import LogIcon, logger
from payload.models.body import (
    Body,
    BytesBody,
    FileBody,
    FormBody,
    MultipartBody,
    RecordBody,
    StreamBody,
    TextBody,
    is_record,
)
from payload.models.core import EMPTY_PAYLOAD, BodyType, Payload
from payload.models.form import is_form_shape


def is_stream(value: Any) -> bool:
    return callable(getattr(value, "read", None))


def classify(value: Any) -> BodyType:
    """Shape of ``value``; first match wins.

    Order: payload pass-through, empty checks, exact text/bytes/form matches,
    path objects, duck-typed streams, records.

    Raises:
        UnsupportedPayloadType: no shape matches.
    """
    match value:
        case Payload():
            return BodyType.PAYLOAD
        case None:
            return BodyType.EMPTY
        case str() | bytes() | bytearray() | memoryview() if not value:
            return BodyType.EMPTY
        case str():
            return BodyType.TEXT
        case bytes() | bytearray() | memoryview():
            return BodyType.BYTES
        case _ if is_form_shape(value):
            return BodyType.FORM
        case os.PathLike():
            return BodyType.FILE
        case _ if is_stream(value):
            return BodyType.STREAM
        case _ if is_record(value):
            return BodyType.RECORD
        case _:
            raise UnsupportedPayloadType(value)


BUILDERS: dict[BodyType, Callable[[Any], Payload]] = {
    BodyType.PAYLOAD: lambda value: value,
    BodyType.EMPTY: lambda value: EMPTY_PAYLOAD,
    BodyType.TEXT: new_string_payload,
    BodyType.BYTES: new_bytes_payload,
    BodyType.FORM: new_form_payload,
    BodyType.FILE: new_file_payload,
    BodyType.STREAM: new_stream_payload,
    BodyType.RECORD: new_json_payload,
}


def new_payload(value: Any = None) -> Payload:
    """Build the payload for any supported body value.

    ``None`` gives the shared empty payload and a ``Payload`` is returned
    unchanged. Unsupported shapes are programmer errors and raise.
    """
    body_type = classify(value)
    logger.debug("Payload classified", icon=LogIcon.DETECTION, body_type=body_type.value)
    return BUILDERS[body_type](value)


def build(body: Body) -> Payload:
    """Build the payload for an explicit body variant."""
    match body:
        case TextBody(text=text):
            return new_string_payload(text)
        case BytesBody(data=data):
            return new_bytes_payload(data)
        case StreamBody(stream=stream):
            return new_stream_payload(stream)
        case FileBody(path=path):
            return new_file_payload(path)
        case RecordBody(record=record):
            return new_json_payload(record)
        case FormBody(form=form):
            return new_form_payload(form)
        case MultipartBody(files=files, form=form):
            return new_multipart_payload(files, form)
        case _:
            raise UnsupportedPayloadType(body)
