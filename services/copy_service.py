import os
import shutil

from domain.models import OpResult, OrganizerConfig
from domain.rules import is_allowed, resolve_collision
from organizer_io.file_copy import VerifyError, copy_verified
from organizer_io.fs_scanner import list_dir


class CopyService:
    def __init__(self, cfg: OrganizerConfig, logger, progress_cb=None):
        self.cfg = cfg
        self.logger = logger
        self.progress_cb = progress_cb
        self._seen = 0

    def tick(self, path: str):
        self._seen += 1
        if self.progress_cb:
            self.progress_cb(self._seen, path)

    def ensure_dir(self, path: str, dry_run: bool, result: OpResult, quiet_existing: bool = False) -> bool:
        """Create path if missing. In dry mode only report it.

        Returns False if the directory could not be created.
        """
        if os.path.isdir(path):
            if not quiet_existing:
                self.logger.log(f"Destination directory already exists: {path}")
            return True

        if dry_run:
            self.logger.log(f"Dry run: would create directory {path}")
            return True

        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            result.add_error(path, f"{type(e).__name__}: {e}")
            self.logger.error(f"{type(e).__name__}: {e}")
            return False

        result.dirs_created += 1
        self.logger.log(f"Created destination directory: {path}")
        return True

    def copy_file(self, src: str, dest_dir: str, dry_run: bool, result: OpResult):
        name = os.path.basename(src)
        if self.cfg.on_collision == "rename" and os.path.isdir(dest_dir):
            name, _ = resolve_collision(dest_dir, name)
        dst = os.path.join(dest_dir, name)

        if dry_run:
            result.planned += 1
            self.logger.log(f"Dry run: {src} -> {dst} (Not copied)")
            return

        try:
            copy_verified(src, dst, verify=self.cfg.verify)
        except (OSError, shutil.Error, ValueError, VerifyError) as e:
            result.add_error(src, f"{type(e).__name__}: {e}")
            self.logger.error(f"{src} -> {dst}: {e}")
            return

        result.copied += 1
        self.logger.log(f"Copied {src} -> {dst}")

    def copy_tree(self, src: str, dst: str, dry_run: bool, result: OpResult | None = None) -> OpResult:
        """Mirror src into dst, copying only allow-listed extensions."""
        result = result if result is not None else OpResult()

        if not os.path.isdir(src):
            self.logger.log("Source directory does not exist.")
            return result

        dst_ok = self.ensure_dir(dst, dry_run, result)

        try:
            files, subdirs = list_dir(src)
        except OSError as e:
            result.add_error(src, f"{type(e).__name__}: {e}")
            self.logger.error(f"Cannot read {src}: {e}")
            return result

        for fn in files:
            path = os.path.join(src, fn)
            self.tick(path)
            if not is_allowed(fn, self.cfg.allowed_exts):
                result.skipped += 1
                continue
            if not dst_ok:
                result.add_error(path, "destination directory unavailable")
                continue
            self.copy_file(path, dst, dry_run, result)

        for d in subdirs:
            self.copy_tree(os.path.join(src, d), os.path.join(dst, d), dry_run, result)

        return result
