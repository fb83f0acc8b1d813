import argparse
import sys
from typing import Callable

from tqdm import tqdm

from app.config import build_config, load_config, merge_config
from artifacts.logger import RunLogger
from artifacts.report_writer import write_summary
from domain.constants import END_COMMAND, MODE_ACTIVE, MODE_DRY
from domain.models import OpResult, OrganizerConfig
from domain.rules import fix_source_folder_path, same_or_inside
from organizer_io.drives import find_removable_drive
from organizer_io.fs_scanner import count_files
from services.copy_service import CopyService
from services.export_service import ExportService
from services.organize_service import OrganizeService
from services.validation_service import ValidationService

Ask = Callable[[str], str]


# ---------------------------
# Helpers
# ---------------------------

def tqdm_enabled() -> bool:
    return sys.stderr.isatty()


def say(*lines: str):
    for line in lines:
        print(line)


class ProgressBar:
    """tqdm bar fed by the services' progress_cb(count, path)."""

    def __init__(self, total: int, desc: str, enabled: bool):
        self.bar = tqdm(total=total, desc=desc, unit="file", dynamic_ncols=True, disable=not enabled)
        self._last = 0

    def __call__(self, count: int, path: str):
        delta = count - self._last
        if delta > 0:
            self.bar.update(delta)
            self._last = count

    def close(self):
        self.bar.close()


class Organizer:
    """Wires the services together for one session."""

    def __init__(self, cfg: OrganizerConfig, logger: RunLogger, bars_on: bool = False,
                 drive_finder=find_removable_drive):
        self.cfg = cfg
        self.logger = logger
        self.bars_on = bars_on
        self.drive_finder = drive_finder
        self.validator = ValidationService(logger)
        self.totals = OpResult()
        self.last_source = ""

    def is_reserved(self, raw: str) -> bool:
        return same_or_inside(fix_source_folder_path(raw), self.cfg.target_root)

    def organize(self, source: str, dry_run: bool) -> OpResult:
        if dry_run:
            self.logger.log("Source folder valid, starting the copy process in dry mode")
        else:
            self.logger.log("Source folder valid, starting the copy process")

        pbar = ProgressBar(count_files(source, prune=self.cfg.target_root), "Organize", self.bars_on)
        try:
            copier = CopyService(self.cfg, self.logger, progress_cb=pbar)
            result = OrganizeService(self.cfg, self.logger, copier=copier).organize(source, dry_run)
        finally:
            pbar.close()

        self.last_source = source
        self._report("Organize", result)
        return result

    def export(self, drive: str, dry_run: bool) -> OpResult:
        pbar = ProgressBar(count_files(self.cfg.target_root), "Export", self.bars_on)
        try:
            copier = CopyService(self.cfg, self.logger, progress_cb=pbar)
            dest, result = ExportService(self.cfg, self.logger, copier=copier).export_to_drive(drive, dry_run)
        finally:
            pbar.close()

        if dest:
            self._report(f"Export to {dest}", result)
        return result

    def _report(self, what: str, result: OpResult):
        c = result.as_counts()
        self.logger.log(
            f"{what} done. Copied={c['copied']} Planned={c['planned']} "
            f"Skipped={c['skipped']} Errors={c['errors']}"
        )
        self.totals.merge(result)

    def finish(self, dry_run: bool):
        if not self.cfg.report_dir:
            return
        try:
            paths = write_summary(self.totals, self.cfg.report_dir, self.last_source, self.cfg.target_root, dry_run)
        except OSError as e:
            self.logger.error(f"Cannot write summary: {e}")
            return
        self.logger.log(f"Summary written: {paths['summary']}")


# ---------------------------
# Interactive flow
# ---------------------------

def choose_mode(ask: Ask) -> bool:
    """Prompt until the user picks 1 (active) or 2 (dry). Returns dry_run."""
    say(
        "This script can run in dry or active mode",
        "",
        "If you wish to run it in active mode press 1",
        "If you wish to run it in dry mode press 2",
        "",
    )
    while True:
        raw = ask("Enter number: ").strip()
        try:
            number = int(raw)
        except ValueError:
            say("You didn't even enter a number..  try again", "")
            continue

        if number == MODE_ACTIVE:
            say("Active mode selected..", "")
            return False
        if number == MODE_DRY:
            say("Dry mode selected..", "")
            return True
        say("wrong numerical input, try again..", "")


def offer_export(org: Organizer, ask: Ask, dry_run: bool):
    drive = org.drive_finder()
    if not drive:
        return

    say(f"USB device detected: {drive}", "")
    answer = ask('Do you wish to copy the generated folder to the USB too? [ "yes" / "no" ] ').strip()
    if answer == "yes":
        say("Beginning process...")
        org.export(drive, dry_run)
    else:
        say("Operation cancelled")


def handle_source(org: Organizer, raw: str, ask: Ask, dry_run: bool):
    if not raw.strip():
        say("You didn't write anything")
        return

    if org.is_reserved(raw):
        say("Folder reserved for organizing files, don't touch!")
        return

    folder = org.validator.check(raw)
    if not folder.valid:
        say("The source directory you entered is invalid, please try again...")
        return

    say("The folder you entered is a valid folder. The folder you will be using is:", folder.path)
    answer = ask('Type "yes" if you wish to continue. Type "no" if you wish to enter a different source directory: ').strip()
    if answer == "yes":
        say("We can start the process")
        org.organize(folder.path, dry_run)
        offer_export(org, ask, dry_run)
    elif answer == "no":
        say("Process aborted")
    else:
        say("Invalid input, process aborted")


def interactive(org: Organizer, ask: Ask, dry_run: bool | None) -> bool:
    if dry_run is None:
        dry_run = choose_mode(ask)

    while True:
        raw = ask(f'Please enter the directory you wish to use. If you wish to close the software, type "{END_COMMAND}": ')
        if raw.strip() == END_COMMAND:
            break
        handle_source(org, raw, ask, dry_run)
    return dry_run


def run_once(org: Organizer, source: str, dry_run: bool, export: bool) -> int:
    if org.is_reserved(source):
        org.logger.error("Folder reserved for organizing files, refusing to use it as source")
        return 1

    folder = org.validator.check(source)
    if not folder.valid:
        org.logger.error(f"Invalid source directory: {source}")
        return 1

    org.organize(folder.path, dry_run)
    if export:
        drive = org.drive_finder()
        if drive:
            org.export(drive, dry_run)
        else:
            org.logger.log("No removable drive detected, export skipped.")
    return 0


# ---------------------------
# CLI main
# ---------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folder-organizer",
        description="Folder Organizer: sort files by extension, optionally export to a USB drive",
    )

    parser.add_argument("--config", help="Config file (json or yaml)")
    parser.add_argument("--target", help="Target root for organized files")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--dry-run", dest="dry_run", action="store_const", const=True, default=None,
                      help="Log intended copies only")
    mode.add_argument("--active", dest="dry_run", action="store_const", const=False,
                      help="Really copy files")

    parser.add_argument("--on-collision", choices=["overwrite", "rename"], help="When a destination file exists")
    parser.add_argument("--verify", action="store_true", default=None, help="Hash-check every copied file")
    parser.add_argument("--export-prefix", help="Folder name prefix for USB exports")

    parser.add_argument("--source", help="Organize this folder without prompting")
    parser.add_argument("--export", action="store_true", help="With --source: also export to a detected USB drive")

    parser.add_argument("--log-file", help="Write logs to file")
    parser.add_argument("--report-dir", help="Write a run summary (csv + txt) here")
    return parser


def main(argv=None, ask: Ask = input, drive_finder=find_removable_drive) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.export and not args.source:
        parser.error("--export requires --source")

    try:
        cfg_file = load_config(args.config)
        cli_cfg = {
            "target_root": args.target,
            "dry_run": args.dry_run,
            "on_collision": args.on_collision,
            "verify": args.verify,
            "export_prefix": args.export_prefix,
            "log_file": args.log_file,
            "report_dir": args.report_dir,
        }
        merged = merge_config(cfg_file, cli_cfg)
        cfg = build_config(merged)
        logger = RunLogger(cfg.log_file)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    org = Organizer(cfg, logger, bars_on=tqdm_enabled(), drive_finder=drive_finder)
    dry_run = cfg.dry_run if merged.get("dry_run") is not None else None

    if args.source:
        rc = run_once(org, args.source, cfg.dry_run, args.export)
        org.finish(cfg.dry_run)
        return rc

    try:
        dry_run = interactive(org, ask, dry_run)
    except (EOFError, KeyboardInterrupt):
        say("")

    org.finish(cfg.dry_run if dry_run is None else dry_run)
    say("We are done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
