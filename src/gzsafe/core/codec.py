# src/gzsafe/core/codec.py
from __future__ import annotations
import enum
import zlib
from typing import Iterable, Iterator

GZIP_WBITS = 31  # 16 + MAX_WBITS: gzip header/trailer
DEFAULT_LEVEL = 9  # same as the gzip module
DEFAULT_PIECE = 64 * 1024

class CodecError(Exception):
    pass

class Mode(str, enum.Enum):
    COMPRESS = "compress"
    DECOMPRESS = "decompress"

class GzipCompressor:
    def __init__(self, level: int = DEFAULT_LEVEL):
        self._z = zlib.compressobj(level, zlib.DEFLATED, GZIP_WBITS)

    def update(self, chunk: bytes) -> Iterator[bytes]:
        data = self._z.compress(chunk)
        if data:
            yield data

    def finalize(self) -> Iterator[bytes]:
        yield self._z.flush(zlib.Z_FINISH)

class GzipDecompressor:
    """
    Inkrementalny gunzip. Obsługuje pliki wieloczłonowe (kolejne membery sklejone jak w `cat a.gz b.gz`)
    i zera dopełniające po memberze, tak jak moduł gzip.
    update() oddaje kawałki po najwyżej `max_length` bajtów - mały chunk wejścia może się
    rozpakować do setek MB.
    Uszkodzone, ucięte lub puste dane -> CodecError.
    """

    def __init__(self, max_length: int = DEFAULT_PIECE):
        if max_length <= 0:
            raise ValueError("max_length must be positive")
        self._max_length = max_length
        self._z = zlib.decompressobj(GZIP_WBITS)
        self._seen_member = False
        self._in_member = False

    def update(self, chunk: bytes) -> Iterator[bytes]:
        data = chunk
        while True:
            if not self._in_member:
                data = data.lstrip(b"\0")
                if not data:
                    return
                self._in_member = True
            try:
                out = self._z.decompress(data, self._max_length)
            except zlib.error as e:
                raise CodecError(f"Invalid gzip data: {e}") from e
            if out:
                yield out
            if self._z.eof:
                # member zakończony; reszta to zera albo następny member
                self._seen_member = True
                self._in_member = False
                data = self._z.unused_data
                self._z = zlib.decompressobj(GZIP_WBITS)
                continue
            data = self._z.unconsumed_tail
            if not data and len(out) < self._max_length:
                return

    def finalize(self) -> Iterable[bytes]:
        if self._in_member:
            raise CodecError("Invalid gzip data: unexpected end of stream")
        if not self._seen_member:
            raise CodecError("Invalid gzip data: empty input")
        return ()

def new_transform(mode: Mode, max_length: int = DEFAULT_PIECE):
    mode = Mode(mode)
    if mode is Mode.COMPRESS:
        return GzipCompressor()
    return GzipDecompressor(max_length)
