"""multipart/form-data body with file uploads and form fields."""

import io
import shutil
from collections.abc import Sequence
from typing import Any

from beartype import beartype

from payload.core.exceptions import UploadFileError
from payload.core.logger import LogIcon, logger
from payload.core.multipart import MultipartWriter
from payload.core.settings import settings
from payload.models.core import Payload, UploadFile
from payload.models.form import to_form_values


def _copy_upload(writer: MultipartWriter, upload: UploadFile) -> None:
    """Copy one file into its own part. The file is closed before returning."""
    part = writer.create_form_file(upload.fieldname, upload.basename)
    try:
        with open(upload.filename, "rb") as handle:
            shutil.copyfileobj(handle, part, settings.COPY_CHUNK_SIZE)
    except OSError as err:
        logger.warning("Upload file unreadable", icon=LogIcon.UPLOAD, path=upload.filename, error=str(err))
        raise UploadFileError(upload.filename, err) from err


@beartype
def new_multipart_payload(files: Sequence[UploadFile], form: Any = None) -> Payload:
    """Buffer the upload files, in order, followed by the form fields.

    The whole body is held in memory; no file handle outlives the call.

    Raises:
        UploadFileError: a file cannot be opened or read. Nothing is returned.
        UnsupportedFormShape: ``form`` is not a form shape.
    """
    values = to_form_values(form) if form is not None else None

    buffer = io.BytesIO()
    with MultipartWriter(buffer) as writer:
        for upload in files:
            _copy_upload(writer, upload)

        if values:
            for key, items in values.items():
                for value in items:
                    writer.write_field(key, value)

    size = buffer.tell()
    buffer.seek(0)
    logger.info(
        "Multipart payload built",
        icon=LogIcon.UPLOAD,
        files=len(files),
        fields=len(values or ()),
        size=size,
    )
    return Payload(stream=buffer, content_type=writer.content_type)
