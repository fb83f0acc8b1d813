import csv
import os

from domain.models import OpResult
from utils.timeutil import file_stamp


def write_summary(result: OpResult, report_dir: str, source: str, target: str, dry_run: bool) -> dict:
    os.makedirs(report_dir, exist_ok=True)
    stamp = file_stamp()
    csv_path = os.path.join(report_dir, f"{stamp}_summary.csv")
    summary_path = os.path.join(report_dir, f"{stamp}_summary.txt")

    counts = result.as_counts()

    with open(csv_path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["source", source])
        w.writerow(["target", target])
        w.writerow(["mode", "DRY" if dry_run else "ACTIVE"])
        w.writerow([])
        w.writerow(["metric", "count"])
        for k, v in counts.items():
            w.writerow([k, v])
        if result.errors:
            w.writerow([])
            w.writerow(["error_path", "message"])
            for path, msg in result.errors:
                w.writerow([path, msg])

    lines = []
    lines.append(f"Source: {source}")
    lines.append(f"Target: {target}")
    lines.append(f"Mode: {'dry run' if dry_run else 'active'}")
    lines.append("")
    lines.append("Summary")
    lines.append(f"- Files copied: {counts['copied']}")
    lines.append(f"- Files planned (dry run): {counts['planned']}")
    lines.append(f"- Files skipped (extension): {counts['skipped']}")
    lines.append(f"- Directories created: {counts['dirs_created']}")
    lines.append(f"- Errors: {counts['errors']}")

    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    return {"csv": csv_path, "summary": summary_path}
