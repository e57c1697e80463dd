"""Chunk types that make up an encrypted or plain AIFF/AIFC file."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from Crypto.Cipher import Blowfish
from Crypto.Util.Padding import unpad

from abledecoder.binary import (
    ChunkFormatError,
    make_id,
    read_id,
    read_int16,
    read_uint32,
    write_id,
    write_int16,
    write_int32,
    write_uint32,
)

_BLOWFISH_KEY = bytes(
    [0x2B, 0xB1, 0x9D, 0x06, 0x98, 0xC3, 0xE1, 0xAB,
     0x20, 0xC6, 0xC1, 0x85, 0xFB, 0x7C, 0xD5, 0x17]
)
_BLOWFISH_IV = bytes([0x28, 0x27, 0xC8, 0xE2, 0xC5, 0xEB, 0xA1, 0xB3])

_KEY_OFFSET = 12
_KEY_SIZE = 256

_FORMAT_VERSION_AIFC = 0xA2805140
_PLAIN_COMMON_SIZE = 18
_COMPRESSION_NONE = make_id("NONE")
_COMPRESSION_NAME = b"not compressed\x00"


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ChunkFormatError(
            f"unexpected end of data: wanted {size} bytes, got {len(data)}"
        )
    return data


class FileChunk(ABC):
    """A chunk with a four-byte id, a big-endian size and a body."""

    chunk_id: ClassVar[bytes]

    def write(self, stream: BinaryIO) -> None:
        """Write id, size, body and a pad byte when the body length is odd."""
        body = io.BytesIO()
        self.write_data(body)
        payload = body.getvalue()
        write_id(stream, self.chunk_id)
        write_int32(stream, len(payload))
        stream.write(payload)
        if len(payload) % 2 == 1:
            stream.write(b"\x00")

    @abstractmethod
    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        """Read the chunk body, which starts at ``data_start``."""

    @abstractmethod
    def write_data(self, stream: BinaryIO) -> None:
        """Write the chunk body."""


def decrypt_key(encrypted: bytes) -> bytes:
    """Decrypt the key block of an ``able`` chunk and return its 256 key bytes."""
    cipher = Blowfish.new(_BLOWFISH_KEY, Blowfish.MODE_CBC, iv=_BLOWFISH_IV)
    try:
        plain = unpad(cipher.decrypt(bytes(encrypted)), Blowfish.block_size)
    except ValueError as exc:
        raise ChunkFormatError("error decrypting data") from exc
    if len(plain) < _KEY_OFFSET + _KEY_SIZE:
        raise ChunkFormatError("decrypted data is too short")
    return plain[_KEY_OFFSET:_KEY_OFFSET + _KEY_SIZE]


class AbleChunk(FileChunk):
    """The ``able`` chunk, holding the encrypted sound data key."""

    chunk_id: ClassVar[bytes] = make_id("able")

    def __init__(self) -> None:
        self._key: bytes | None = None

    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        self._key = None
        _read_exact(stream, 12)
        length = read_uint32(stream)
        self._key = decrypt_key(_read_exact(stream, length))

    def write_data(self, stream: BinaryIO) -> None:
        raise io.UnsupportedOperation("the able chunk cannot be written")

    @property
    def key(self) -> bytes:
        """The decrypted 256-byte key."""
        if self._key is None:
            raise ChunkFormatError("contains no decrypted key")
        return self._key


@dataclass
class CommonChunk(FileChunk):
    """The ``COMM`` chunk describing the sound format."""

    chunk_id: ClassVar[bytes] = make_id("COMM")

    num_channels: int = 0
    num_sample_frames: int = 0
    sample_size: int = 0
    sample_rate: bytes = bytes(10)
    compression_type: bytes | None = None

    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        self.num_channels = read_int16(stream)
        self.num_sample_frames = read_uint32(stream)
        self.sample_size = read_int16(stream)
        self.sample_rate = _read_exact(stream, 10)
        if data_size == _PLAIN_COMMON_SIZE:
            self.compression_type = _COMPRESSION_NONE
        else:
            self.compression_type = read_id(stream)

    def write_data(self, stream: BinaryIO) -> None:
        write_int16(stream, self.num_channels)
        write_uint32(stream, self.num_sample_frames)
        write_int16(stream, self.sample_size)
        stream.write(bytes(self.sample_rate))
        write_id(stream, _COMPRESSION_NONE)
        stream.write(bytes([len(_COMPRESSION_NAME) - 1]))
        stream.write(_COMPRESSION_NAME)


class FormatVersionChunk(FileChunk):
    """The ``FVER`` chunk; its content is ignored on read."""

    chunk_id: ClassVar[bytes] = make_id("FVER")

    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        """Nothing is kept from the input's version chunk."""

    def write_data(self, stream: BinaryIO) -> None:
        write_uint32(stream, _FORMAT_VERSION_AIFC)


@dataclass
class SoundDataChunk(FileChunk):
    """The ``SSND`` chunk holding the sample bytes."""

    chunk_id: ClassVar[bytes] = make_id("SSND")

    sound_data: bytes = field(default=b"")

    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        offset = read_uint32(stream)
        block_size = read_uint32(stream)
        if offset != 0 or block_size != 0:
            raise ChunkFormatError("sound data offset or blockSize is not zero")
        if data_size < 8:
            raise ChunkFormatError("sound data chunk is too short")
        self.sound_data = _read_exact(stream, data_size - 8)

    def write_data(self, stream: BinaryIO) -> None:
        write_uint32(stream, 0)
        write_uint32(stream, 0)
        stream.write(self.sound_data)

    def decrypt(self, key: bytes) -> None:
        """Decrypt the sample bytes in place with a 256-byte key."""
        if len(key) != _KEY_SIZE:
            raise ValueError("the size of key must be 256 bytes")
        # Within a run of 256 positions the high bytes of the index are fixed,
        # so the key index is the low byte xored with one constant per run.
        streams: dict[int, bytes] = {}
        data = self.sound_data
        out = bytearray()
        for start in range(0, len(data), 256):
            high = ((start >> 8) ^ (start >> 16) ^ (start >> 24)) & 0xFF
            stream = streams.get(high)
            if stream is None:
                stream = bytes(key[low ^ high] for low in range(256))
                streams[high] = stream
            out.extend(
                b if b == 0 or b == k else b ^ k
                for b, k in zip(data[start:start + 256], stream)
            )
        self.sound_data = bytes(out)