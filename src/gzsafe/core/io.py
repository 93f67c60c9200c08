# src/gzsafe/core/io.py
from __future__ import annotations
import os
from pathlib import Path

import aiofiles
import aiofiles.os

from gzsafe.core.codec import Mode, new_transform
from gzsafe.core.pipeline import DEFAULT_CHUNK_SIZE, DEFAULT_DEPTH, pipe
from gzsafe.utils.naming import next_collision_free

class NotFoundError(FileNotFoundError):
    pass

def _open_source(path: Path):
    return aiofiles.open(path, "rb")

def _open_destination(path: Path):
    return aiofiles.open(path, "wb")

async def _check_source(src: Path) -> None:
    if not await aiofiles.os.path.isfile(src):
        raise NotFoundError(f"Not a file: {src}")
    if not await aiofiles.os.access(src, os.R_OK):
        raise NotFoundError(f"File is not readable: {src}")

async def transcode(source, destination, mode: Mode, cfg: dict | None = None, logger=None) -> str:
    """
    Strumieniowe (de)kompresowanie jednego pliku: source -> gzip codec -> destination.
    Docelowa ścieżka przechodzi przez next_collision_free, więc istniejący plik nigdy nie jest
    nadpisywany; zwracana jest faktycznie użyta ścieżka.
    Brak źródła -> NotFoundError zanim cokolwiek zostanie otwarte/zapisane.
    Błąd w trakcie: OSError (odczyt/zapis) albo CodecError; niepełny plik zostaje na dysku,
    chyba że io.remove_partial_on_error = true.
    """
    cfg = cfg or {}
    io_cfg = cfg.get("io", {})
    chunk_size = io_cfg.get("chunk_size", DEFAULT_CHUNK_SIZE)
    depth = io_cfg.get("queue_depth", DEFAULT_DEPTH)
    mode = Mode(mode)

    src = Path(source)
    await _check_source(src)

    dst = next_collision_free(Path(destination))
    if dst != Path(destination) and logger:
        logger.info(f"[{mode.value}] {destination} exists, writing to {dst}")

    transform = new_transform(mode, chunk_size)
    dst.parent.mkdir(parents=True, exist_ok=True)
    try:
        async with _open_source(src) as fin:
            async with _open_destination(dst) as fout:
                written = await pipe(fin, transform, fout, chunk_size=chunk_size, depth=depth)
    except BaseException as e:
        if logger:
            logger.debug(f"[{mode.value}] {src} -> {dst} failed: {e!r}")
        if io_cfg.get("remove_partial_on_error", False):
            _remove_partial(dst, logger)
        raise

    if logger:
        logger.debug(f"[{mode.value}] {src} -> {dst} ({written} bytes)")
    return str(dst)

def _remove_partial(dst: Path, logger=None) -> None:
    try:
        dst.unlink(missing_ok=True)
    except OSError as e:
        if logger:
            logger.warning(f"[cleanup] could not remove partial output {dst}: {e}")

async def compress_path(source, destination, cfg: dict | None = None, logger=None) -> str:
    return await transcode(source, destination, Mode.COMPRESS, cfg, logger)

async def decompress_path(source, destination, cfg: dict | None = None, logger=None) -> str:
    return await transcode(source, destination, Mode.DECOMPRESS, cfg, logger)
