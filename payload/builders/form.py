"""application/x-www-form-urlencoded body."""

import io
from typing import Any

from payload.core.settings import settings
from payload.models.core import Payload
from payload.models.form import to_form_values


def new_form_payload(form: Any) -> Payload:
    """Encode a string map, a multi-value string map or FormValues.

    Keys are written in sorted order so equal inputs produce identical bodies.
    """
    body = to_form_values(form).encode()
    return Payload(stream=io.BytesIO(body.encode(settings.TEXT_ENCODING)), content_type=settings.FORM_CONTENT_TYPE)
