"""The top-level ``FORM`` chunk of an AIFF/AIFC file."""

from __future__ import annotations

from typing import BinaryIO, ClassVar

from abledecoder.binary import ChunkFormatError, make_id, read_id, read_int32, write_id
from abledecoder.chunks import (
    AbleChunk,
    CommonChunk,
    FileChunk,
    FormatVersionChunk,
    SoundDataChunk,
)

_FORM_AIFC = make_id("AIFC")
_FORM_AIFF = make_id("AIFF")
_COMPRESSION_ABLE = make_id("able")
_COMPRESSION_NONE = make_id("NONE")


class FormChunk(FileChunk):
    """Reads an AIFF/AIFC container, decrypting its samples, and writes plain AIFC."""

    chunk_id: ClassVar[bytes] = make_id("FORM")

    def __init__(self) -> None:
        self.format_version_chunk = FormatVersionChunk()
        self.able_chunk = AbleChunk()
        self.common_chunk = CommonChunk()
        self.sound_data_chunk = SoundDataChunk()
        self.is_aifc = False
        self.was_encrypted = False

    def read(self, stream: BinaryIO) -> None:
        """Read a whole file, starting with its ``FORM`` header."""
        if read_id(stream) != self.chunk_id:
            raise ChunkFormatError("this does not seem to be an AIFC file")
        data_size = read_int32(stream)
        self.read_data(stream, stream.tell(), data_size)

    def read_data(self, stream: BinaryIO, data_start: int, data_size: int) -> None:
        form_type = read_id(stream)
        if form_type not in (_FORM_AIFC, _FORM_AIFF):
            raise ChunkFormatError("form type is not AIFC or AIFF")
        self.is_aifc = form_type == _FORM_AIFC

        known: dict[bytes, FileChunk] = {
            chunk.chunk_id: chunk
            for chunk in (
                self.format_version_chunk,
                self.able_chunk,
                self.common_chunk,
                self.sound_data_chunk,
            )
        }
        data_end = data_start + data_size

        while stream.tell() < data_end:
            sub_id = read_id(stream)
            sub_size = read_int32(stream)
            sub_start = stream.tell()
            if sub_size < 0 or sub_start + sub_size > data_end:
                raise ChunkFormatError("invalid data while parsing chunks")
            sub_end = sub_start + sub_size + (sub_size % 2)

            chunk = known.get(sub_id)
            if chunk is not None:
                chunk.read_data(stream, sub_start, sub_size)

            stream.seek(sub_end)

        compression = self.common_chunk.compression_type
        if compression == _COMPRESSION_ABLE:
            self.sound_data_chunk.decrypt(self.able_chunk.key)
            self.was_encrypted = True
        elif compression == _COMPRESSION_NONE:
            self.was_encrypted = False
        else:
            raise ChunkFormatError(
                "unsupported compression type. only able and NONE are supported."
            )

    def write_data(self, stream: BinaryIO) -> None:
        write_id(stream, _FORM_AIFC)
        self.format_version_chunk.write(stream)
        self.common_chunk.write(stream)
        self.sound_data_chunk.write(stream)