# main.py

"""
Orchestrator: read CLI flags, collect files, clean each one (or preview), print stats, optionally write CSV.
"""
from __future__ import annotations
import argparse
import signal
import sys
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from sanitizer.console import Console
from sanitizer.errors import ScratchUnavailable
from sanitizer.model import CleanOutcome, ScanRow, Status
from sanitizer.report import print_greeting, print_summary, to_row, write_csv
from sanitizer.rewrite import clean
from sanitizer.scratch import Workspace
from sanitizer.settings import DEFAULT_MAX_SIZE, PROG, SUPPORTED_EXTENSIONS, VERSION, Settings
from sanitizer.stats import RunStats
from sanitizer.walk import categorize, iter_files

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_USAGE = 2
EXIT_NO_SCRATCH = 4
EXIT_SIGINT = 130
EXIT_SIGTERM = 143


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    p = argparse.ArgumentParser(
        prog=PROG,
        description="Remove UTF-8 BOM signatures and Windows CRLF line endings from text files, in place.",
        epilog=f"Without paths, the current directory is scanned recursively for: {' '.join(SUPPORTED_EXTENSIONS)}.",
    )
    p.add_argument("paths", nargs="*", metavar="FILE", help="Files or directories to process.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable detailed output and processing logs.")
    p.add_argument("-n", "--dry-run", action="store_true",
                   help="Preview which files would be processed (no modifications).")
    p.add_argument("-V", "--version", action="version", version=f"{PROG} version {VERSION}")
    p.add_argument("--max-size", type=int, metavar="MIB",
                   help=f"Skip files larger than this many MiB (default: {DEFAULT_MAX_SIZE // 1024 // 1024}).")
    p.add_argument("--report", type=str, help="Optional path to a CSV report with one row per file.")
    return p.parse_args(argv)


def _get_effective_settings(args: argparse.Namespace) -> Settings:
    """Apply CLI flags over the defaults."""
    if args.max_size is not None and args.max_size <= 0:
        print(f"[ERR] --max-size must be a positive number of MiB, got {args.max_size}.", file=sys.stderr)
        raise SystemExit(EXIT_USAGE)

    return Settings(
        paths=tuple(Path(p) for p in args.paths),
        verbose=bool(args.verbose or args.dry_run),
        dry_run=bool(args.dry_run),
        max_size=args.max_size * 1024 * 1024 if args.max_size else DEFAULT_MAX_SIZE,
        report=Path(args.report) if args.report else None,
    )


def _iter_candidates(settings: Settings, console: Console, stats: RunStats) -> Iterator[Path]:
    """Yield the files to process; explicit paths that do not exist count as access errors."""
    if settings.recursive:
        console.info(f"Recursive mode: Scanning for files with extensions: {' '.join(settings.extensions)}")
        found = 0
        for fp in iter_files(Path("."), settings.extensions):
            found += 1
            yield fp
        if not found:
            console.info("No files found with supported extensions for processing")
        return

    console.info(f"Specific file mode: Processing {len(settings.paths)} path(s)")
    for root in settings.paths:
        if not root.exists():
            console.error(f"File not found: {root}")
            stats.record_error("access")
            continue
        yield from iter_files(root, settings.extensions)


def process_file(fp: Path, settings: Settings, workspace: Workspace, console: Console) -> Tuple[CleanOutcome, str]:
    """Clean (or preview) a single file and log what happened."""
    category = categorize(fp, settings.extensions)
    outcome = clean(fp, size_limit=settings.max_size, preview=settings.dry_run, workspace=workspace)

    if outcome.status is Status.SKIPPED:
        verb = "Would skip (clean)" if settings.dry_run else "No issues detected, skipping"
        console.processing(f"{verb}: {fp}")
    elif outcome.status is Status.PREVIEW:
        console.write(f"Would process: {fp} (Issues: {outcome.issues.label}, Type: {category})")
    elif outcome.status is Status.PROCESSED:
        console.success(f"Successfully processed: {fp} (Fixed: {outcome.issues.label}, Type: {category})")
    else:
        console.error(f"{fp}: [{outcome.error_kind}] {outcome.error}")

    for w in outcome.warnings:
        console.warning(f"{w} ({fp})")

    return outcome, category


def _terminate(signum, _frame) -> None:
    raise SystemExit(EXIT_SIGTERM)


def run(settings: Settings, console: Console, workspace: Workspace) -> int:
    """Process every candidate and report. Returns the exit code."""
    stats = RunStats()
    rows: List[ScanRow] = []

    print_greeting(console, settings, VERSION)
    for fp in _iter_candidates(settings, console, stats):
        outcome, category = process_file(fp, settings, workspace, console)
        stats.record(outcome, category)
        rows.append(to_row(outcome, category))

    if settings.report:
        write_csv(settings.report, rows)
    print_summary(console, stats, settings)
    return stats.exit_code


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main orchestration function.

    Returns:
        int: Exit code.
    """
    args = parse_args(argv)
    settings = _get_effective_settings(args)
    console = Console(verbose=settings.verbose)
    workspace = Workspace(settings.temp_dir)

    try:
        workspace.check()
    except ScratchUnavailable as exc:
        console.error(str(exc))
        return EXIT_NO_SCRATCH

    previous = signal.signal(signal.SIGTERM, _terminate)
    try:
        return run(settings, console, workspace)
    except KeyboardInterrupt:
        console.error("Interrupted")
        return EXIT_SIGINT
    finally:
        signal.signal(signal.SIGTERM, previous)
        workspace.sweep()


if __name__ == "__main__":
    raise SystemExit(main())
