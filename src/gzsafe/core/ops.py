# src/gzsafe/core/ops.py
from __future__ import annotations
from pathlib import Path

from gzsafe.core import io as gzio

DEFAULT_SOURCE = "files/source.txt"
DEFAULT_DESTINATION = "files/source_decompressed.txt"

def default_compressed_path(path) -> Path:
    p = Path(path)
    return p.with_name(p.name + ".gz")

def default_decompressed_path(path) -> Path:
    p = Path(path)
    if p.suffix.lower() == ".gz" and p.stem:
        return p.with_name(p.stem)
    return p.with_name(p.name + ".out")

async def compress_file(source, cfg: dict | None = None, logger=None) -> str:
    return await gzio.compress_path(source, default_compressed_path(source), cfg, logger)

async def decompress_file(source, destination, cfg: dict | None = None, logger=None) -> str:
    return await gzio.decompress_path(source, destination, cfg, logger)

async def run_round_trip(source=None, destination=None, cfg: dict | None = None, logger=None) -> None:
    """Kompresja domyślnego pliku i od razu dekompresja artefaktu do pliku obok (smoke test)."""
    rt = (cfg or {}).get("round_trip", {})
    source = source or rt.get("source", DEFAULT_SOURCE)
    destination = destination or rt.get("destination", DEFAULT_DESTINATION)

    compressed = await compress_file(source, cfg, logger)
    restored = await decompress_file(compressed, destination, cfg, logger)
    if logger:
        logger.info(f"[round-trip] {source} -> {compressed} -> {restored}")
