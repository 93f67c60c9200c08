# src/gzsafe/main.py
import argparse
import asyncio
import sys
from pathlib import Path

from gzsafe.config import manager as cfgman
from gzsafe.core import ops
from gzsafe.core.codec import CodecError
from gzsafe.utils.logs import get_logger

def parse_args(argv):
    p = argparse.ArgumentParser(prog="gzsafe", description="gzip compress/decompress without overwriting existing files")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--compress", nargs="+", metavar="PATH", help="Compress files (PATH -> PATH.gz)")
    g.add_argument("--decompress", nargs="+", metavar="PATH", help="Decompress .gz files")
    g.add_argument("--round-trip", action="store_true", help="Compress the default source, then decompress it next to it")
    p.add_argument("-o", "--output", help="Destination for --decompress (single input only)")
    p.add_argument("--log-file", help="Also write the log to this file")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    p.add_argument("--dry-run", action="store_true")
    ns = p.parse_args(argv)
    if ns.output and not (ns.decompress and len(ns.decompress) == 1):
        p.error("--output requires --decompress with exactly one PATH")
    return ns

def _print_status(ok: bool, action: str, src, out):
    if ok:
        print(f"[OK] {action}: {src} -> {out}")
    else:
        print(f"[SKIP] {action}: {src}")

async def _run_each(paths, action: str, job, dry_target, dry_run: bool, logger) -> int:
    any_error = False
    for raw in paths:
        src = Path(raw)
        if dry_run:
            _print_status(True, f"{action} (dry-run)", src, dry_target(src))
            continue
        try:
            out = await job(src)
        except (OSError, CodecError) as e:
            logger.error(f"{action} {src}: {e}")
            _print_status(False, action, src, None)
            any_error = True
            continue
        _print_status(True, action, src, out)
    return 1 if any_error else 0

async def run_cli(ns) -> int:
    cfg = cfgman.load_config()
    log_cfg = cfg.get("logging", {})
    logger = get_logger("gzsafe", ns.log_level or log_cfg.get("level", "INFO"), ns.log_file or log_cfg.get("file"))

    try:
        if ns.compress:
            return await _run_each(
                ns.compress, "COMPRESS",
                lambda src: ops.compress_file(src, cfg, logger),
                ops.default_compressed_path, ns.dry_run, logger,
            )

        if ns.decompress:
            target = (lambda src: Path(ns.output)) if ns.output else ops.default_decompressed_path
            return await _run_each(
                ns.decompress, "DECOMPRESS",
                lambda src: ops.decompress_file(src, target(src), cfg, logger),
                target, ns.dry_run, logger,
            )

        if ns.round_trip:
            if ns.dry_run:
                rt = cfg.get("round_trip", {})
                _print_status(True, "ROUND-TRIP (dry-run)", rt.get("source"), rt.get("destination"))
                return 0
            try:
                await ops.run_round_trip(cfg=cfg, logger=logger)
            except (OSError, CodecError) as e:
                logger.error(f"ROUND-TRIP: {e}")
                _print_status(False, "ROUND-TRIP", cfg.get("round_trip", {}).get("source"), None)
                return 1
            print("[OK] ROUND-TRIP")
            return 0
    except Exception as e:
        print(f"[ERROR] {e}")
        return 2
    return 0

def main() -> int:
    ns = parse_args(sys.argv[1:])
    return asyncio.run(run_cli(ns))

if __name__ == "__main__":
    raise SystemExit(main())
