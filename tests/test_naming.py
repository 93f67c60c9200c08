from pathlib import Path

import pytest

from gzsafe.utils import naming
from gzsafe.utils.naming import next_collision_free, split_name, with_suffix_n

def test_free_path_is_returned_unchanged(tmp_path: Path):
    p = tmp_path / "source.txt.gz"
    assert next_collision_free(p) == p

def test_collisions_count_up_from_one(tmp_path: Path):
    (tmp_path / "source.txt.gz").write_bytes(b"x")
    assert next_collision_free(tmp_path / "source.txt.gz") == tmp_path / "source_1.txt.gz"

    (tmp_path / "source_1.txt.gz").write_bytes(b"x")
    assert next_collision_free(tmp_path / "source.txt.gz") == tmp_path / "source_2.txt.gz"

def test_gap_is_reused_on_fresh_scan(tmp_path: Path):
    for name in ("a.txt", "a_2.txt"):
        (tmp_path / name).write_text("x")
    # numeracja zawsze od 1, bez pamięci między wywołaniami
    assert next_collision_free(tmp_path / "a.txt") == tmp_path / "a_1.txt"

def test_directory_counts_as_existing(tmp_path: Path):
    (tmp_path / "out").mkdir()
    assert next_collision_free(tmp_path / "out") == tmp_path / "out_1"

def test_resolver_does_not_create_anything(tmp_path: Path):
    (tmp_path / "x.gz").write_bytes(b"")
    next_collision_free(tmp_path / "x.gz")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["x.gz"]

def test_split_name():
    assert split_name("source.txt.gz") == ("source", ".txt.gz")
    assert split_name("source_decompressed.txt") == ("source_decompressed", ".txt")
    assert split_name("README") == ("README", "")
    assert split_name(".env") == (".env", "")
    assert split_name(".config.json") == (".config", ".json")

def test_with_suffix_n_keeps_directory():
    assert with_suffix_n(Path("/data/files/name"), 3) == Path("/data/files/name_3")

def test_existence_check_errors_propagate(tmp_path: Path, monkeypatch):
    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(naming.os, "lstat", denied)
    with pytest.raises(PermissionError):
        next_collision_free(tmp_path / "source.txt.gz")
