# src/gzsafe/utils/naming.py
from __future__ import annotations
import os
from pathlib import Path

def split_name(name: str) -> tuple[str, str]:
    """
    "source.txt.gz" -> ("source", ".txt.gz"); a leading dot belongs to the base (".env" -> (".env", "")).
    """
    head = len(name) - len(name.lstrip("."))
    dot = name.find(".", head)
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]

def _exists(path: Path) -> bool:
    # only "not there" counts as free; EACCES & co. propagate
    try:
        os.lstat(path)
    except (FileNotFoundError, NotADirectoryError):
        return False
    return True

def with_suffix_n(path: Path, n: int) -> Path:
    base, ext = split_name(path.name)
    return path.parent / f"{base}_{n}{ext}"

def next_collision_free(path: Path) -> Path:
    path = Path(path)
    if not _exists(path):
        return path
    n = 1
    while True:
        candidate = with_suffix_n(path, n)
        if not _exists(candidate):
            return candidate
        n += 1
