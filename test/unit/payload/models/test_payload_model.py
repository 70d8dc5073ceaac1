"""Tests for the Payload model and UploadFile."""

import io
from dataclasses import FrozenInstanceError

import pytest
from conftest import MockReleaser, MockStream

from payload.models.core import EMPTY_PAYLOAD, Payload, UploadFile


# -----------------------------------------------------------------------------
# Empty Payload Tests
# -----------------------------------------------------------------------------


class TestEmptyPayload:
    """Tests for the shared empty payload."""

    def test_empty_payload_has_no_stream(self) -> None:
        """Verify empty payload has no stream, content type or releaser."""
        assert EMPTY_PAYLOAD.stream is None
        assert EMPTY_PAYLOAD.content_type is None
        assert EMPTY_PAYLOAD.releaser is None
        assert EMPTY_PAYLOAD.is_empty

    def test_empty_payload_reads_nothing(self) -> None:
        """Verify reading the empty payload yields zero bytes, repeatedly."""
        assert EMPTY_PAYLOAD.read() == b""
        assert EMPTY_PAYLOAD.read(10) == b""
        assert list(EMPTY_PAYLOAD) == []

    def test_empty_payload_release_is_noop(self) -> None:
        """Verify releasing the sentinel does not mark it."""
        EMPTY_PAYLOAD.release()
        assert not EMPTY_PAYLOAD.released
        assert EMPTY_PAYLOAD.headers == {}


# -----------------------------------------------------------------------------
# Payload Tests
# -----------------------------------------------------------------------------


class TestPayload:
    """Tests for Payload behavior."""

    def test_fields_are_read_only(self) -> None:
        """Verify payload attributes cannot be reassigned."""
        payload = Payload(stream=io.BytesIO(b"x"), content_type="text/plain")
        with pytest.raises(AttributeError):
            payload.content_type = "application/json"  # type: ignore[misc]

    def test_empty_content_type_is_none(self) -> None:
        """Verify an empty content type label is treated as absent."""
        payload = Payload(stream=io.BytesIO(b"x"), content_type="")
        assert payload.content_type is None
        assert payload.headers == {}

    def test_headers_from_content_type(self) -> None:
        """Verify headers expose the content type."""
        payload = Payload(stream=io.BytesIO(b"{}"), content_type="application/json")
        assert payload.headers == {"Content-Type": "application/json"}

    def test_read_encodes_text_streams(self) -> None:
        """Verify text chunks from duck-typed streams come back as bytes."""
        payload = Payload(stream=io.StringIO("héllo"))
        assert payload.read() == "héllo".encode()

    def test_iter_chunks(self) -> None:
        """Verify chunked iteration covers the whole stream."""
        payload = Payload(stream=io.BytesIO(b"abcdefg"))
        assert list(payload.iter_chunks(3)) == [b"abc", b"def", b"g"]

    def test_stream_is_single_pass(self) -> None:
        """Verify a consumed stream yields nothing more."""
        payload = Payload(stream=MockStream(b"data"))
        assert payload.read() == b"data"
        assert payload.read() == b""

    def test_release_exactly_once(self) -> None:
        """Verify the releaser is closed once however often release is called."""
        releaser = MockReleaser()
        payload = Payload(stream=io.BytesIO(b"x"), releaser=releaser)

        payload.release()
        payload.release()

        assert releaser.calls == 1
        assert payload.released

    def test_context_manager_releases(self) -> None:
        """Verify leaving the with block releases the resource."""
        releaser = MockReleaser()
        with Payload(stream=io.BytesIO(b"x"), releaser=releaser) as payload:
            assert payload.read() == b"x"
        assert releaser.calls == 1

    def test_context_manager_releases_on_error(self) -> None:
        """Verify the resource is released when the consumer fails."""
        releaser = MockReleaser()
        with pytest.raises(RuntimeError), Payload(stream=io.BytesIO(b"x"), releaser=releaser):
            raise RuntimeError("transport failed")
        assert releaser.calls == 1

    def test_repr(self) -> None:
        """Verify string representation."""
        assert repr(EMPTY_PAYLOAD) == "Payload(empty)"
        assert "BytesIO" in repr(Payload(stream=io.BytesIO(b"")))


# -----------------------------------------------------------------------------
# UploadFile Model Tests
# -----------------------------------------------------------------------------


class TestUploadFileModel:
    """Tests for UploadFile model."""

    def test_upload_file_fields(self) -> None:
        """Verify UploadFile keeps field name and path."""
        upload = UploadFile(fieldname="f", filename="dir/x.txt")
        assert upload.fieldname == "f"
        assert upload.filename == "dir/x.txt"

    @pytest.mark.parametrize(
        ("filename", "basename"),
        [
            ("x.txt", "x.txt"),
            ("dir/x.txt", "x.txt"),
            ("/abs/path/report.pdf", "report.pdf"),
        ],
    )
    def test_upload_file_basename(self, filename: str, basename: str) -> None:
        """Verify basename drops directories."""
        assert UploadFile("f", filename).basename == basename

    def test_upload_file_is_frozen(self) -> None:
        """Verify UploadFile is immutable."""
        upload = UploadFile("f", "x.txt")
        with pytest.raises(FrozenInstanceError):
            upload.fieldname = "g"  # type: ignore[misc]

    def test_upload_file_equality(self) -> None:
        """Verify UploadFile has value identity."""
        assert UploadFile("f", "x.txt") == UploadFile("f", "x.txt")
