# sanitizer/report.py

from __future__ import annotations
import csv
from pathlib import Path
from typing import Iterable

from .console import Console, timestamp
from .model import CleanOutcome, ScanRow
from .settings import Settings
from .stats import ERROR_KINDS, RunStats

_ERROR_LABELS = {
    "access": "Access errors",
    "size": "File size errors",
    "backup": "Backup errors",
    "write": "Write errors",
    "replace": "Replace errors",
    "other": "Other errors",
}


def to_row(outcome: CleanOutcome, category: str) -> ScanRow:
    """Build the CSV row for one outcome."""
    try:
        size = outcome.path.stat().st_size
    except OSError:
        size = 0
    return ScanRow(
        path=str(outcome.path),
        size_bytes=size,
        category=category,
        issues=outcome.issues.label,
        status=outcome.status.value,
        error_kind=outcome.error_kind,
        error=outcome.error,
    )


def write_csv(out_path: Path, rows: Iterable[ScanRow]) -> None:
    """Write scan results to a CSV file.

    Args:
        out_path (Path): Destination CSV file path.
        rows (Iterable[ScanRow]): Sequence of scan result rows.

    Returns:
        None
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with out_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["path", "size_bytes", "category", "issues", "status", "error_kind", "error"])
        for r in rows:
            writer.writerow([
                r.path,
                r.size_bytes,
                r.category,
                r.issues,
                r.status,
                r.error_kind,
                r.error,
            ])


def print_greeting(console: Console, settings: Settings, version: str) -> None:
    """Banner with version, start time and the active configuration."""
    on_off = {True: "ENABLED", False: "DISABLED"}
    console.write()
    console.write(console.paint(f"=== UTF-8 BOM & CRLF Cleaner v{version} ===", "HEADER"))
    console.write(f"{console.paint('Started:', 'INFO')} {timestamp()}")

    console.section("Configuration")
    console.write(f"Verbose mode: {on_off[settings.verbose]}")
    console.write(f"Dry-run mode: {on_off[settings.dry_run]}")
    console.write(f"Supported extensions: {' '.join(settings.extensions)}")
    console.write(f"Maximum file size: {settings.max_size // 1024 // 1024} MB")

    console.section("Operation Mode")
    console.write("• Scanning files for UTF-8 BOM and CRLF issues")
    if settings.dry_run:
        console.write("• Showing which files need cleaning")
        console.write(f"• {console.paint('NO FILES WILL BE MODIFIED', 'WARN')} (preview mode)")
    else:
        console.write("• Removing invisible UTF-8 BOM signatures")
        console.write("• Converting Windows CRLF to Unix LF")
        console.write("• Preserving file ownership, permissions, and timestamps")
        console.write("• Creating backup copies during processing")
    console.write()
    console.write(console.paint("Starting file processing...", "SUCCESS"))
    console.write()


def print_summary(console: Console, stats: RunStats, settings: Settings) -> None:
    """Print the end-of-run statistics."""
    console.write()
    console.write(console.paint("=== PROCESSING SUMMARY ===", "HEADER"))
    console.write(f"Execution time: {int(stats.elapsed)} seconds")
    console.write(f"Files processed: {stats.processed}")
    console.write(f"Files skipped (clean): {stats.skipped}")
    console.write(f"Errors encountered: {stats.errors}")

    if stats.processed:
        console.section("Issues Fixed")
        console.write(f"BOM signatures removed: {stats.bom_removed}")
        console.write(f"CRLF line endings fixed: {stats.crlf_fixed}")
        console.write(f"  BOM only: {stats.by_issue['BOM']}")
        console.write(f"  CRLF only: {stats.by_issue['CRLF']}")
        console.write(f"  BOM and CRLF: {stats.by_issue['BOM+CRLF']}")

        console.section("File Type Distribution")
        for ext in settings.extensions:
            if stats.by_category[ext]:
                console.write(f".{ext} files: {stats.by_category[ext]}")
        if stats.by_category["other"]:
            console.write(f"Other files: {stats.by_category['other']}")

    if stats.errors:
        console.section("Error Breakdown")
        for kind in ERROR_KINDS:
            console.write(f"{_ERROR_LABELS[kind]}: {stats.by_error[kind]}")

    if settings.dry_run and stats.processed:
        console.section("Files That Would Be Processed")
        for p in stats.files:
            console.write(str(p))

    if settings.report:
        console.write()
        console.write(f"Report: {settings.report.resolve()}")

    console.write()
    console.write(console.paint(f"Processing completed at: {timestamp()}", "SUCCESS"))
