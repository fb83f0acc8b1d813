from __future__ import annotations

from pathlib import Path

import pytest

from organizer_io.fs_scanner import count_files, list_dir
from tests.conftest import write_files


def test_list_dir_splits_and_sorts(tmp_path: Path) -> None:
    write_files(tmp_path, {"b.txt": "", "a.txt": "", "z/x.txt": "", "m/y.txt": ""})
    files, dirs = list_dir(str(tmp_path))
    assert files == ["a.txt", "b.txt"]
    assert dirs == ["m", "z"]


def test_list_dir_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        list_dir(str(tmp_path / "missing"))


def test_count_files_with_prune(tmp_path: Path) -> None:
    write_files(tmp_path, {"a.txt": "", "sub/b.txt": "", "out/c.txt": "", "out/deep/d.txt": ""})
    assert count_files(str(tmp_path)) == 4
    assert count_files(str(tmp_path), prune=str(tmp_path / "out")) == 2
    assert count_files(str(tmp_path / "missing")) == 0
