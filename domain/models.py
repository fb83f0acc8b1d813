from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from domain.constants import (
    ALLOWED_EXTS,
    DEFAULT_TARGET_ROOT,
    EXT_FOLDERS,
    MAX_EXPORT_SLOTS,
)


@dataclass
class SourceFolder:
    path: str
    valid: bool = False


@dataclass(frozen=True)
class OrganizerConfig:
    dry_run: bool = True
    target_root: str = DEFAULT_TARGET_ROOT

    allowed_exts: Tuple[str, ...] = ALLOWED_EXTS
    ext_folders: Dict[str, str] = field(default_factory=lambda: dict(EXT_FOLDERS))

    # Export to removable drive
    max_export_slots: int = MAX_EXPORT_SLOTS
    export_prefix: str = ""

    on_collision: str = "overwrite"   # "overwrite" | "rename"
    verify: bool = False

    log_file: Optional[str] = None
    report_dir: Optional[str] = None


@dataclass
class OpResult:
    copied: int = 0
    planned: int = 0       # dry mode
    skipped: int = 0       # extension not handled
    dirs_created: int = 0
    errors: List[Tuple[str, str]] = field(default_factory=list)

    def add_error(self, path: str, msg: str) -> None:
        self.errors.append((path, msg))

    def merge(self, other: "OpResult") -> "OpResult":
        self.copied += other.copied
        self.planned += other.planned
        self.skipped += other.skipped
        self.dirs_created += other.dirs_created
        self.errors.extend(other.errors)
        return self

    def as_counts(self) -> Dict[str, int]:
        return {
            "copied": self.copied,
            "planned": self.planned,
            "skipped": self.skipped,
            "dirs_created": self.dirs_created,
            "errors": len(self.errors),
        }
