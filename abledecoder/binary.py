"""Big-endian field readers and writers for IFF/AIFF chunk streams."""

from __future__ import annotations

import struct
from typing import BinaryIO

_UINT32 = struct.Struct(">I")
_INT32 = struct.Struct(">i")
_INT16 = struct.Struct(">h")


class ChunkFormatError(ValueError):
    """Raised when chunk data is malformed, truncated or unsupported."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ChunkFormatError(
            f"unexpected end of data: wanted {size} bytes, got {len(data)}"
        )
    return data


def make_id(tag: str | bytes) -> bytes:
    """Return the four-byte chunk identifier for ``tag``."""
    raw = tag.encode("ascii") if isinstance(tag, str) else bytes(tag)
    if len(raw) != 4:
        raise ValueError(f"a chunk id has exactly 4 bytes, got {len(raw)}")
    return raw


def read_id(stream: BinaryIO) -> bytes:
    """Read a four-byte chunk identifier."""
    return _read_exact(stream, 4)


def write_id(stream: BinaryIO, chunk_id: bytes) -> None:
    """Write a four-byte chunk identifier."""
    stream.write(make_id(chunk_id))


def read_uint32(stream: BinaryIO) -> int:
    """Read a big-endian unsigned 32-bit integer."""
    return _UINT32.unpack(_read_exact(stream, 4))[0]


def write_uint32(stream: BinaryIO, value: int) -> None:
    """Write a big-endian unsigned 32-bit integer."""
    stream.write(_UINT32.pack(value))


def read_int32(stream: BinaryIO) -> int:
    """Read a big-endian signed 32-bit integer."""
    return _INT32.unpack(_read_exact(stream, 4))[0]


def write_int32(stream: BinaryIO, value: int) -> None:
    """Write a big-endian signed 32-bit integer."""
    stream.write(_INT32.pack(value))


def read_int16(stream: BinaryIO) -> int:
    """Read a big-endian signed 16-bit integer."""
    return _INT16.unpack(_read_exact(stream, 2))[0]


def write_int16(stream: BinaryIO, value: int) -> None:
    """Write a big-endian signed 16-bit integer."""
    stream.write(_INT16.pack(value))