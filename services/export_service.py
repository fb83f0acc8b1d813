import os

from domain.constants import MAX_EXPORT_SLOTS
from domain.models import OpResult, OrganizerConfig
from services.copy_service import CopyService


def slot_path(base: str, num: int) -> str:
    return f"{base}{num}"


def is_slot_free(base: str, num: int, on_error=None) -> bool:
    """True if base+num doesn't exist yet. A failed probe counts as taken."""
    try:
        os.lstat(os.path.abspath(slot_path(base, num).strip()))
    except FileNotFoundError:
        return True
    except (OSError, ValueError) as e:
        if on_error:
            on_error(f"Error checking directory: {e}")
        return False
    return False


def find_free_slot(base: str, start: int = 0, limit: int = MAX_EXPORT_SLOTS, on_error=None) -> int | None:
    """Smallest n >= start (and < start + limit) with base+n unused, else None."""
    for n in range(start, start + limit):
        if is_slot_free(base, n, on_error=on_error):
            return n
    return None


class ExportService:
    def __init__(self, cfg: OrganizerConfig, logger, copier: CopyService | None = None):
        self.cfg = cfg
        self.logger = logger
        self.copier = copier or CopyService(cfg, logger)

    def export_base(self, drive_root: str) -> str:
        return os.path.join(drive_root, self.cfg.export_prefix) if self.cfg.export_prefix else drive_root

    def export_to_drive(self, drive_root: str, dry_run: bool) -> tuple[str | None, OpResult]:
        """Copy the organized target tree to the first free slot on the drive."""
        base = self.export_base(drive_root)
        num = find_free_slot(base, 0, self.cfg.max_export_slots, on_error=self.logger.log)
        if num is None:
            self.logger.error(f"No free export folder under {drive_root} (tried {self.cfg.max_export_slots})")
            return None, OpResult()

        dest = slot_path(base, num)
        if dry_run:
            self.logger.log(f"Source folder valid, starting the copy process in dry mode -> {dest}")
        else:
            self.logger.log(f"Source folder valid, starting the copy process -> {dest}")

        result = self.copier.copy_tree(self.cfg.target_root, dest, dry_run)
        return dest, result
