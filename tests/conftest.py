from __future__ import annotations

import os
from pathlib import Path

import pytest

from artifacts.logger import RunLogger
from domain.models import OrganizerConfig


def write_files(root: Path, files: dict[str, str]) -> Path:
    """Create files (relative posix paths -> text) under root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, text in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    return root


def snapshot(root: Path) -> dict[str, tuple[bool, float]]:
    """Every path under root with (is_dir, mtime), to detect any mutation."""
    out = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for n in dirnames + filenames:
            full = os.path.join(dirpath, n)
            st = os.stat(full)
            out[os.path.relpath(full, root)] = (os.path.isdir(full), st.st_mtime)
    return out


def rel_files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


def scripted(answers: list[str]):
    """input() replacement fed from a list; EOFError when exhausted."""
    it = iter(answers)

    def _ask(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _ask


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "run.log"


@pytest.fixture
def logger(log_path: Path) -> RunLogger:
    return RunLogger(str(log_path), echo=False)


@pytest.fixture
def sample_source(tmp_path: Path) -> Path:
    return write_files(
        tmp_path / "source",
        {
            "a.txt": "alpha",
            "b.JPG": "jpeg-bytes",
            "notes.md": "not allowed",
            "sub/d.png": "png-bytes",
            "sub/deeper/e.txt": "echo",
            "sub/deeper/f.exe": "binary",
        },
    )


@pytest.fixture
def cfg(tmp_path: Path) -> OrganizerConfig:
    return OrganizerConfig(dry_run=False, target_root=str(tmp_path / "target"))
