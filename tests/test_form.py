import io
import struct

import pytest
from Crypto.Cipher import Blowfish
from Crypto.Util.Padding import pad

from abledecoder.binary import ChunkFormatError
from abledecoder.chunks import SoundDataChunk
from abledecoder.form import FormChunk

CIPHER_KEY = bytes(
    [0x2B, 0xB1, 0x9D, 0x06, 0x98, 0xC3, 0xE1, 0xAB,
     0x20, 0xC6, 0xC1, 0x85, 0xFB, 0x7C, 0xD5, 0x17]
)
CIPHER_IV = bytes([0x28, 0x27, 0xC8, 0xE2, 0xC5, 0xEB, 0xA1, 0xB3])
SAMPLE_RATE = b"\x40\x0e\xac\x44" + bytes(6)


def chunk(chunk_id, body):
    padding = b"\x00" if len(body) % 2 else b""
    return chunk_id + struct.pack(">i", len(body)) + body + padding


def comm(compression=None, frames=4):
    body = struct.pack(">hIh", 1, frames, 8) + SAMPLE_RATE
    if compression is not None:
        body += compression
    return chunk(b"COMM", body)


def ssnd(data):
    return chunk(b"SSND", bytes(8) + data)


def able(key):
    cipher = Blowfish.new(CIPHER_KEY, Blowfish.MODE_CBC, iv=CIPHER_IV)
    encrypted = cipher.encrypt(pad(bytes(12) + key, Blowfish.block_size))
    return chunk(b"able", bytes(12) + struct.pack(">I", len(encrypted)) + encrypted)


def form(form_type, *chunks):
    body = form_type + b"".join(chunks)
    return b"FORM" + struct.pack(">i", len(body)) + body


def read_form(data):
    result = FormChunk()
    result.read(io.BytesIO(data))
    return result


def test_plain_aiff_is_read():
    samples = b"\x01\x02\x03\x04"
    result = read_form(form(b"AIFF", comm(), ssnd(samples)))
    assert result.sound_data_chunk.sound_data == samples
    assert result.common_chunk.compression_type == b"NONE"
    assert result.common_chunk.sample_rate == SAMPLE_RATE
    assert result.was_encrypted is False
    assert result.is_aifc is False


def test_encrypted_aifc_is_decrypted():
    key = bytes((i * 7 + 3) % 256 for i in range(256))
    plain = bytes(range(256)) * 3 + b"\x00\x05"
    scrambled = SoundDataChunk(plain)
    scrambled.decrypt(key)
    assert scrambled.sound_data != plain

    data = form(
        b"AIFC",
        chunk(b"FVER", b"\xa2\x80\x51\x40"),
        comm(b"able"),
        able(key),
        ssnd(scrambled.sound_data),
    )
    result = read_form(data)
    assert result.sound_data_chunk.sound_data == plain
    assert result.was_encrypted is True
    assert result.is_aifc is True


def test_unknown_odd_chunk_is_skipped():
    samples = b"\x10\x20"
    result = read_form(form(b"AIFF", chunk(b"ANNO", b"abc"), comm(), ssnd(samples)))
    assert result.sound_data_chunk.sound_data == samples


def test_written_output_layout():
    samples = b"\x01\x02\x03"
    result = read_form(form(b"AIFF", comm(), ssnd(samples)))
    out = io.BytesIO()
    result.write(out)
    data = out.getvalue()
    assert data[:4] == b"FORM"
    assert struct.unpack(">i", data[4:8])[0] == len(data) - 8
    assert data[8:12] == b"AIFC"
    assert data[12:24] == b"FVER\x00\x00\x00\x04\xa2\x80\x51\x40"
    assert data[24:28] == b"COMM"
    assert b"NONE\x0enot compressed\x00" in data
    assert len(data) % 2 == 0


def test_written_output_reads_back():
    samples = bytes(range(1, 40))
    original = read_form(form(b"AIFF", comm(frames=39), ssnd(samples)))
    out = io.BytesIO()
    original.write(out)
    again = read_form(out.getvalue())
    assert again.is_aifc is True
    assert again.common_chunk.compression_type == b"NONE"
    assert again.common_chunk.num_sample_frames == 39
    assert again.sound_data_chunk.sound_data == samples


def test_not_a_form_file():
    with pytest.raises(ChunkFormatError, match="does not seem to be an AIFC file"):
        read_form(b"RIFF" + struct.pack(">i", 4) + b"WAVE")


def test_wrong_form_type():
    with pytest.raises(ChunkFormatError, match="form type is not AIFC or AIFF"):
        read_form(form(b"WAVE", comm(), ssnd(b"\x01")))


def test_negative_sub_chunk_size():
    bad = b"ANNO" + struct.pack(">i", -2)
    with pytest.raises(ChunkFormatError, match="invalid data while parsing chunks"):
        read_form(form(b"AIFF", bad))


def test_sub_chunk_past_form_end():
    bad = b"ANNO" + struct.pack(">i", 100) + b"ab"
    with pytest.raises(ChunkFormatError, match="invalid data while parsing chunks"):
        read_form(form(b"AIFF", bad))


def test_unsupported_compression():
    with pytest.raises(ChunkFormatError, match="unsupported compression type"):
        read_form(form(b"AIFC", comm(b"sowt"), ssnd(b"\x01\x02")))


def test_able_compression_without_key():
    with pytest.raises(ChunkFormatError, match="contains no decrypted key"):
        read_form(form(b"AIFC", comm(b"able"), ssnd(b"\x01\x02")))