import gzip
import os

import pytest

from gzsafe.core.codec import CodecError, GzipCompressor, GzipDecompressor, Mode, new_transform

def _feed(transform, data: bytes, step: int) -> bytes:
    out = [b"".join(transform.update(data[i:i + step])) for i in range(0, len(data), step)]
    out.append(b"".join(transform.finalize()))
    return b"".join(out)

def test_compressor_output_is_standard_gzip():
    data = os.urandom(10000) + b"a" * 50000
    assert gzip.decompress(_feed(GzipCompressor(), data, 4096)) == data

def test_decompressor_reads_gzip_module_output_byte_by_byte():
    data = b"This is the original content of the file"
    assert _feed(GzipDecompressor(), gzip.compress(data), 1) == data

def test_decompressor_handles_multiple_members():
    blob = gzip.compress(b"first ") + gzip.compress(b"second")
    assert _feed(GzipDecompressor(), blob, 7) == b"first second"

def test_malformed_input_raises_codec_error():
    with pytest.raises(CodecError):
        _feed(GzipDecompressor(), b"definitely not gzip data", 8)

def test_truncated_input_raises_codec_error():
    blob = gzip.compress(os.urandom(4096))
    with pytest.raises(CodecError, match="unexpected end"):
        _feed(GzipDecompressor(), blob[:-10], 512)

def test_empty_input_raises_codec_error():
    with pytest.raises(CodecError, match="empty"):
        GzipDecompressor().finalize()

def test_new_transform_accepts_mode_names():
    assert isinstance(new_transform("compress"), GzipCompressor)
    assert isinstance(new_transform(Mode.DECOMPRESS), GzipDecompressor)
    with pytest.raises(ValueError):
        new_transform("zip")

def test_highly_compressible_chunk_comes_out_in_bounded_pieces():
    data = b"\0" * (8 * 1024 * 1024)
    blob = gzip.compress(data)
    dec = GzipDecompressor(max_length=4096)

    pieces = []
    for i in range(0, len(blob), 64 * 1024):
        pieces.extend(dec.update(blob[i:i + 64 * 1024]))
    pieces.extend(dec.finalize())

    assert max(len(p) for p in pieces) <= 4096
    assert b"".join(pieces) == data

def test_zero_padding_after_member_is_ignored():
    blob = gzip.compress(b"hello") + b"\0" * 8
    assert _feed(GzipDecompressor(), blob, 5) == b"hello"

def test_member_after_padding_is_still_read():
    blob = gzip.compress(b"a") + b"\0" * 3 + gzip.compress(b"b")
    assert _feed(GzipDecompressor(), blob, 2) == b"ab"

def test_trailing_garbage_raises_codec_error():
    with pytest.raises(CodecError):
        _feed(GzipDecompressor(), gzip.compress(b"hello") + b"junk", 64)

def test_rejects_non_positive_max_length():
    with pytest.raises(ValueError):
        GzipDecompressor(max_length=0)
