from __future__ import annotations

from pathlib import Path

from domain.models import OrganizerConfig
from services.organize_service import OrganizeService
from tests.conftest import rel_files, snapshot, write_files


def test_organize_is_flat_per_extension(tmp_path: Path, sample_source: Path, cfg: OrganizerConfig, logger) -> None:
    result = OrganizeService(cfg, logger).organize(str(sample_source), dry_run=False)
    target = Path(cfg.target_root)

    assert rel_files(target) == {
        "text_files/a.txt",
        "text_files/e.txt",
        "JPG_files/b.JPG",
        "PNG_files/d.png",
    }
    # no mirrored structure inside the extension folders
    assert sorted(p.name for p in target.iterdir()) == ["JPG_files", "PNG_files", "text_files"]
    assert not any(p.is_dir() for p in (target / "text_files").iterdir())
    assert result.copied == 4
    assert result.skipped == 2
    assert result.dirs_created == 4


def test_organize_creates_all_folders_even_if_unused(tmp_path: Path, cfg: OrganizerConfig, logger) -> None:
    src = write_files(tmp_path / "src", {"only.txt": "x"})
    OrganizeService(cfg, logger).organize(str(src), dry_run=False)
    target = Path(cfg.target_root)
    for folder in ("text_files", "PNG_files", "JPG_files"):
        assert (target / folder).is_dir()


def test_organize_dry_run_touches_nothing(tmp_path: Path, sample_source: Path, cfg: OrganizerConfig, logger) -> None:
    before = snapshot(tmp_path)
    result = OrganizeService(cfg, logger).organize(str(sample_source), dry_run=True)
    after = snapshot(tmp_path)

    # only the run log may appear
    assert {k for k in after if not k.startswith("logs")} == {k for k in before if not k.startswith("logs")}
    assert not Path(cfg.target_root).exists()
    assert result.planned == 4
    assert result.copied == 0
    assert result.dirs_created == 0


def test_organize_name_clash_overwrites(tmp_path: Path, cfg: OrganizerConfig, logger) -> None:
    src = write_files(tmp_path / "src", {"a.txt": "top", "sub/a.txt": "nested"})
    OrganizeService(cfg, logger).organize(str(src), dry_run=False)
    assert (Path(cfg.target_root) / "text_files" / "a.txt").read_text() == "nested"


def test_organize_name_clash_rename(tmp_path: Path, logger) -> None:
    cfg = OrganizerConfig(dry_run=False, target_root=str(tmp_path / "target"), on_collision="rename")
    src = write_files(tmp_path / "src", {"a.txt": "top", "sub/a.txt": "nested"})
    OrganizeService(cfg, logger).organize(str(src), dry_run=False)
    folder = Path(cfg.target_root) / "text_files"
    assert (folder / "a.txt").read_text() == "top"
    assert (folder / "a (1).txt").read_text() == "nested"


def test_organize_skips_target_inside_source(tmp_path: Path, logger) -> None:
    src = write_files(tmp_path / "src", {"a.txt": "x", "out/text_files/old.txt": "old"})
    cfg = OrganizerConfig(dry_run=False, target_root=str(src / "out"))
    result = OrganizeService(cfg, logger).organize(str(src), dry_run=False)

    assert result.errors == []
    assert result.copied == 1
    assert rel_files(src / "out") == {"text_files/a.txt", "text_files/old.txt"}


def test_organize_custom_mapping(tmp_path: Path, logger) -> None:
    cfg = OrganizerConfig(
        dry_run=False,
        target_root=str(tmp_path / "target"),
        ext_folders={"md": "Docs", "txt": "Docs"},
    )
    src = write_files(tmp_path / "src", {"a.md": "1", "b.TXT": "2", "c.png": "3"})
    result = OrganizeService(cfg, logger).organize(str(src), dry_run=False)
    assert rel_files(Path(cfg.target_root)) == {"Docs/a.md", "Docs/b.TXT"}
    assert result.skipped == 1


def test_organize_missing_source(tmp_path: Path, cfg: OrganizerConfig, logger) -> None:
    result = OrganizeService(cfg, logger).organize(str(tmp_path / "nope"), dry_run=False)
    assert result.copied == 0
    assert not Path(cfg.target_root).exists()
