"""OpenFlow message header and request framing."""

from __future__ import annotations

import dataclasses
import io
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO

HEADER_LEN = 8
_MAX_LENGTH = 0xFFFF
_HEADER_FORMAT = struct.Struct("!BBHI")


class BodyTooLongError(ValueError):
    """The request body does not fit into the length field of the header."""

    def __init__(self) -> None:
        super().__init__("openflow: Request body is too long")


class CorruptedHeaderError(ValueError):
    """The header announces a length shorter than the header itself."""

    def __init__(self) -> None:
        super().__init__("openflow: Corrupted header")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``stream`` or raise EOFError."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise EOFError(f"expected {size} bytes, got {size - remaining}")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


@dataclass
class Header:
    """The fixed eight-byte header that starts every OpenFlow message."""

    version: int = 0
    type: int = 0
    length: int = 0
    transaction: int = 0

    def to_bytes(self) -> bytes:
        """Serialize the header into the wire format."""
        return _HEADER_FORMAT.pack(
            self.version, self.type, self.length, self.transaction
        )

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Header:
        """Read a header in wire format from a binary stream."""
        return cls(*_HEADER_FORMAT.unpack(_read_exact(stream, HEADER_LEN)))

    def copy(self) -> Header:
        """Return an independent copy of the header."""
        return dataclasses.replace(self)


def _serialize(source: Any) -> bytes:
    if source is None:
        return b""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.to_bytes()


class _LazyBody(io.RawIOBase):
    """A readable stream that serializes its source on the first read.

    A failure to serialize is remembered and raised on every later read.
    """

    def __init__(self, source: Any) -> None:
        super().__init__()
        self._source = source
        self._buffer: io.BytesIO | None = None
        self._error: BaseException | None = None

    def readable(self) -> bool:
        return True

    def _load(self) -> io.BytesIO:
        if self._error is not None:
            raise self._error
        if self._buffer is None:
            try:
                data = _serialize(self._source)
            except Exception as exc:
                self._error = exc
                raise
            self._buffer = io.BytesIO(data)
        return self._buffer

    def readinto(self, buffer: Any) -> int:
        return self._load().readinto(buffer)


@dataclass
class Request:
    """An OpenFlow request received by a server or to be sent by a client."""

    header: Header = field(default_factory=Header)
    body: BinaryIO | None = None
    proto: str = ""
    proto_major: int = 0
    proto_minor: int = 0
    addr: Any = None
    content_length: int = 0
    conn: Any = None

    def proto_at_least(self, major: int, minor: int) -> bool:
        """Report whether the protocol version is at least major.minor."""
        return self.proto_major > major or (
            self.proto_major == major and self.proto_minor >= minor
        )

    def to_bytes(self) -> bytes:
        """Serialize the request, updating the header length on the way."""
        self.header.length = HEADER_LEN
        if self.body is None:
            return self.header.to_bytes()

        payload = self.body.read() or b""
        if len(payload) + HEADER_LEN > _MAX_LENGTH:
            raise BodyTooLongError()

        self.header.length += len(payload)
        return self.header.to_bytes() + payload

    def write_to(self, stream: BinaryIO) -> int:
        """Write the request in wire format and return the byte count."""
        data = self.to_bytes()
        stream.write(data)
        return len(data)

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Request:
        """Read one request in wire format from a binary stream."""
        header = Header.read_from(stream)
        minor = header.version - 1

        content_length = header.length - HEADER_LEN
        if content_length < 0:
            raise CorruptedHeaderError()

        payload = _read_exact(stream, content_length)
        return cls(
            header=header,
            body=io.BytesIO(payload),
            proto=f"OFP/1.{minor}",
            proto_major=1,
            proto_minor=minor,
            content_length=content_length,
        )


def new_request(msg_type: int, body: Any) -> Request:
    """Create an OFP/1.3 request of the given type with an optional body.

    The body may be None, a bytes-like object, or any object with a
    ``to_bytes()`` method; it is serialized lazily on the first read.
    """
    request = Request(
        body=_LazyBody(body),
        proto="OFP/1.3",
        proto_major=1,
        proto_minor=3,
    )
    request.header.version = request.proto_major + request.proto_minor
    request.header.type = msg_type
    return request