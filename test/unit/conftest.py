"""Test fixtures for http-payload unit tests."""

from dataclasses import dataclass, field
from email.parser import BytesParser
from email.policy import HTTP
from pathlib import Path

import pytest
from pydantic import BaseModel


# -----------------------------------------------------------------------------
# Sample records
# -----------------------------------------------------------------------------


class SampleModel(BaseModel):
    """Sample Pydantic model for testing."""

    name: str
    value: int
    tags: list[str] = []


@dataclass
class SampleRecord:
    """Sample dataclass record for testing."""

    name: str
    value: int
    tags: list[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Mock classes for caller streams
# -----------------------------------------------------------------------------


@dataclass
class MockStream:
    """Duck-typed readable stream that records whether it was closed."""

    _data: bytes = b""
    closed: bool = False
    _offset: int = 0

    def read(self, size: int = -1) -> bytes:
        end = len(self._data) if size < 0 else self._offset + size
        chunk = self._data[self._offset:end]
        self._offset += len(chunk)
        return chunk

    def close(self) -> None:
        self.closed = True


@dataclass
class MockReleaser:
    """Closeable that counts close calls."""

    calls: int = 0

    def close(self) -> None:
        self.calls += 1


# -----------------------------------------------------------------------------
# Multipart parsing
# -----------------------------------------------------------------------------


@dataclass
class ParsedPart:
    """One decoded multipart part."""

    name: str | None
    filename: str | None
    content_type: str
    content: bytes


def parse_multipart(body: bytes, content_type: str) -> list[ParsedPart]:
    """Parse a multipart/form-data body with the stdlib email parser."""
    message = BytesParser(policy=HTTP).parsebytes(b"Content-Type: " + content_type.encode() + b"\r\n\r\n" + body)
    assert message.is_multipart()
    return [
        ParsedPart(
            name=part.get_param("name", header="content-disposition"),
            filename=part.get_filename(),
            content_type=part.get_content_type(),
            content=part.get_payload(decode=True),
        )
        for part in message.iter_parts()
    ]


# -----------------------------------------------------------------------------
# File fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def make_file(tmp_path: Path):
    """Factory fixture to create files in a temporary directory."""

    def _make(name: str, content: bytes | str = b"") -> Path:
        path = tmp_path / name
        path.write_bytes(content.encode() if isinstance(content, str) else content)
        return path

    return _make


@pytest.fixture
def hello_file(make_file) -> Path:
    """x.txt containing 'hello'."""
    return make_file("x.txt", "hello")


@pytest.fixture
def missing_path(tmp_path: Path) -> Path:
    """Path that does not exist."""
    return tmp_path / "missing" / "nothing.txt"
