# abledecoder

Turns AIFC sound files whose sample data is encrypted with the `able`
compression type into ordinary, uncompressed AIFC files that any audio
tool can play.

The file's `able` chunk carries a Blowfish-encrypted key block; the 256-byte
key inside it is recovered and used to restore the sound samples. Plain AIFF
or AIFC files with compression type `NONE` are accepted too and are simply
written out again as AIFC. (An 18-byte `COMM` chunk, as found in plain AIFF,
is taken to mean compression type `NONE`.)

## Installation

```
pip install .
```

The package depends on `pycryptodome` for Blowfish.

## Usage

```
abledecoder <in> <out>
```

- `<in>` is the encrypted AIFC (or plain AIFF/AIFC) file.
- `<out>` is where the decrypted AIFC file is written.

Run without exactly two arguments, it prints a usage line and exits with
status 0.

If the input file cannot be parsed (wrong header, malformed or truncated
chunks, an unsupported compression type, a key that will not decrypt), the
reason and `reading file <in> failed` are printed to standard error and the
command exits with status 1; a failure while writing the output is reported
the same way with `writing file <out> failed`. If either file cannot be opened
at all, the command stops with an `OSError` naming the file.

When the input was not encrypted, it prints
`info: file was not encrypted. duplicated input file.` and still writes the
output file.

The output always contains an `FVER` chunk, a `COMM` chunk with compression
type `NONE` ("not compressed") and an `SSND` chunk with the sound data;
any other chunks in the input, the `able` chunk among them, are dropped.
Only compression types `able` and `NONE` are supported, and `SSND` chunks
must have a zero offset and block size.

## Use from Python

```python
from abledecoder.form import FormChunk

form = FormChunk()
with open("song.aifc", "rb") as source:
    form.read(source)
with open("song-decoded.aifc", "wb") as target:
    form.write(target)
```

After `read`, `form.was_encrypted` tells whether the samples were decrypted
and `form.is_aifc` whether the input's form type was `AIFC` rather than
`AIFF`. The parsed chunks are available as `form.format_version_chunk`,
`form.able_chunk`, `form.common_chunk` and `form.sound_data_chunk`.

The lower-level pieces:

- `abledecoder.binary`: `make_id`, `read_id`, `write_id`, and big-endian
  `read_uint32`/`write_uint32`, `read_int32`/`write_int32`,
  `read_int16`/`write_int16`. Malformed or truncated data raises
  `ChunkFormatError`, a subclass of `ValueError`.
- `abledecoder.chunks`: the abstract `FileChunk` (with `write`, `read_data`,
  `write_data`), `AbleChunk` (its `key` property holds the decrypted key),
  `CommonChunk` (`num_channels`, `num_sample_frames`, `sample_size`,
  `sample_rate`, `compression_type`), `FormatVersionChunk`,
  `SoundDataChunk` (`sound_data` and `decrypt(key)`), and the
  `decrypt_key` function. An `AbleChunk` cannot be written.

## Tests

```
pip install .[test]
pytest
```