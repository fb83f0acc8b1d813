from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from organizer_io import drives

MOUNTS = """\
sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
/dev/nvme0n1p2 / ext4 rw,relatime 0 0
/dev/sdb1 /media/alice/MY\\040STICK vfat rw,nosuid,nodev 0 0
/dev/sdc1 /run/media/bob/BACKUP exfat rw,nosuid 0 0
tmpfs /run/user/1000 tmpfs rw 0 0
"""


def test_parse_media_mounts() -> None:
    assert drives.parse_media_mounts(MOUNTS) == [
        "/media/alice/MY STICK/",
        "/run/media/bob/BACKUP/",
    ]


def test_parse_media_mounts_ignores_garbage() -> None:
    assert drives.parse_media_mounts("\n   \nnonsense\n") == []


def test_linux_unreadable_mounts_means_no_drive(tmp_path: Path) -> None:
    assert drives._linux_removable_drives(str(tmp_path / "missing")) == []


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_macos_volumes_skip_boot_volume(tmp_path: Path) -> None:
    (tmp_path / "USB").mkdir()
    os.symlink("/", str(tmp_path / "Macintosh HD"))
    assert drives._macos_removable_drives(str(tmp_path)) == [str(tmp_path / "USB") + "/"]


def test_find_removable_drive_picks_first(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(drives, "removable_drives", lambda: ["E:\\", "F:\\"])
    assert drives.find_removable_drive() == "E:\\"
    monkeypatch.setattr(drives, "removable_drives", lambda: [])
    assert drives.find_removable_drive() is None
