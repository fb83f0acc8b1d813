import os

from domain.models import OpResult, OrganizerConfig
from domain.rules import folder_for, same_or_inside
from organizer_io.fs_scanner import list_dir
from services.copy_service import CopyService


class OrganizeService:
    def __init__(self, cfg: OrganizerConfig, logger, copier: CopyService | None = None, progress_cb=None):
        self.cfg = cfg
        self.logger = logger
        self.copier = copier or CopyService(cfg, logger, progress_cb=progress_cb)

    def prepare_target(self, dry_run: bool, result: OpResult) -> set[str]:
        """Create the target root and its per-extension folders.

        Returns the folder names that are usable.
        """
        root = self.cfg.target_root
        if not self.copier.ensure_dir(root, dry_run, result, quiet_existing=True):
            return set()

        ready = set()
        for folder in sorted(set(self.cfg.ext_folders.values())):
            if self.copier.ensure_dir(os.path.join(root, folder), dry_run, result, quiet_existing=True):
                ready.add(folder)
        return ready

    def organize(self, src: str, dry_run: bool) -> OpResult:
        """Route every matching file under src into target_root/<ext folder>/."""
        result = OpResult()
        if not os.path.isdir(src):
            self.logger.log("Source directory does not exist.")
            return result

        ready = self.prepare_target(dry_run, result)
        self._walk(src, dry_run, ready, result)
        return result

    def _walk(self, src: str, dry_run: bool, ready: set[str], result: OpResult):
        try:
            files, subdirs = list_dir(src)
        except OSError as e:
            result.add_error(src, f"{type(e).__name__}: {e}")
            self.logger.error(f"Cannot read {src}: {e}")
            return

        for fn in files:
            path = os.path.join(src, fn)
            self.copier.tick(path)
            folder = folder_for(fn, self.cfg.ext_folders)
            if folder is None:
                result.skipped += 1
                continue
            if folder not in ready:
                result.add_error(path, "destination directory unavailable")
                continue
            self.copier.copy_file(path, os.path.join(self.cfg.target_root, folder), dry_run, result)

        for d in subdirs:
            sub = os.path.join(src, d)
            # never re-ingest our own output
            if same_or_inside(sub, self.cfg.target_root):
                continue
            self._walk(sub, dry_run, ready, result)
