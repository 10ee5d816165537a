import os

import pytest
from pathlib import Path

from exif_stats import config
from exif_stats.exceptions import ScanPathError
from exif_stats.models import ScanCounters
from exif_stats.scanning.filesystem import FileClassifier


def test_classifier_filters_extensions(tmp_path):
    (tmp_path / "a.jpg").write_bytes(b"a")
    (tmp_path / "b.JPG").write_bytes(b"b")
    (tmp_path / "c.jpeg").write_bytes(b"c")
    (tmp_path / "d.png").write_bytes(b"d")
    (tmp_path / "notes.txt").write_text("x")

    counters = ScanCounters()
    found = FileClassifier().candidates(tmp_path, counters)

    assert sorted(p.name for p in found) == ["a.jpg", "b.JPG"]
    # Every file counts as visited, JPEG or not
    assert counters.files_visited == 5


def test_depth_bound(tmp_path):
    # Root is depth 0: d1/d2/d3/keep.jpg is depth 4, one more level is 5
    deep = tmp_path / "d1" / "d2" / "d3"
    deep.mkdir(parents=True)
    (deep / "keep.jpg").write_bytes(b"k")
    deeper = deep / "d4"
    deeper.mkdir()
    (deeper / "too_deep.jpg").write_bytes(b"t")

    counters = ScanCounters()
    found = FileClassifier(max_depth=4).candidates(tmp_path, counters)

    assert [p.name for p in found] == ["keep.jpg"]
    assert counters.files_visited == 1


def test_default_depth_is_four():
    assert FileClassifier().max_depth == config.MAX_SCAN_DEPTH == 4


def test_symlinks_are_not_files(tmp_path):
    target = tmp_path / "real.jpg"
    target.write_bytes(b"r")
    try:
        os.symlink(target, tmp_path / "link.jpg")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")

    counters = ScanCounters()
    found = FileClassifier().candidates(tmp_path, counters)

    assert found == [target]
    assert counters.files_visited == 1


def test_unreadable_directory_is_skipped(monkeypatch, tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "hidden.jpg").write_bytes(b"h")
    (tmp_path / "open.jpg").write_bytes(b"o")

    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path) == locked:
            raise PermissionError(f"denied: {path}")
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    found = FileClassifier().candidates(tmp_path)
    assert found == [tmp_path / "open.jpg"]


def test_missing_root_raises(tmp_path):
    with pytest.raises(ScanPathError):
        FileClassifier().candidates(tmp_path / "nope")


def test_file_as_root_raises(tmp_path):
    f = tmp_path / "a.jpg"
    f.write_bytes(b"a")
    with pytest.raises(ScanPathError):
        FileClassifier().candidates(f)


def test_depth_zero_lists_nothing(tmp_path):
    (tmp_path / "top.jpg").write_bytes(b"t")

    counters = ScanCounters()
    found = FileClassifier(max_depth=0).candidates(tmp_path, counters)

    assert found == []
    assert counters.files_visited == 0
