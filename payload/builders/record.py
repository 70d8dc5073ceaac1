"""Structured record to JSON body."""

import io
from typing import Any

import orjson
from pydantic import BaseModel

from payload.core.exceptions import SerializationError, UnsupportedPayloadType
from payload.core.logger import LogIcon, logger
from payload.core.settings import settings
from payload.models.body import is_record
from payload.models.core import Payload


def _orjson_default(obj: Any) -> Any:
    """Let pydantic models nested inside dataclasses serialize."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def encode_record(record: Any) -> bytes:
    """Compact JSON bytes, fields in declaration order.

    Raises:
        SerializationError: a field value cannot be encoded (cycles, unsupported types).
        UnsupportedPayloadType: the value is neither a pydantic model nor a dataclass.
    """
    match record:
        case BaseModel():
            try:
                return record.model_dump_json().encode(settings.TEXT_ENCODING)
            except ValueError as err:
                raise SerializationError(record, err) from err
        case _ if is_record(record):
            try:
                return orjson.dumps(record, default=_orjson_default)
            except orjson.JSONEncodeError as err:
                raise SerializationError(record, err) from err
        case _:
            raise UnsupportedPayloadType(record)


def new_json_payload(record: Any) -> Payload:
    body = encode_record(record)
    logger.debug("JSON payload encoded", icon=LogIcon.JSON, record=type(record).__name__, size=len(body))
    return Payload(stream=io.BytesIO(body), content_type=settings.JSON_CONTENT_TYPE)
