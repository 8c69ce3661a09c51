from __future__ import annotations

import csv
import io
from pathlib import Path

from sanitizer.console import Console
from sanitizer.model import CleanOutcome, IssueSet, Status
from sanitizer.report import print_summary, to_row, write_csv
from sanitizer.settings import Settings
from sanitizer.stats import RunStats


def _outcomes():
    return [
        (CleanOutcome(Path("a.php"), Status.PROCESSED, IssueSet(bom=True, crlf=True)), "php"),
        (CleanOutcome(Path("b.js"), Status.PROCESSED, IssueSet(crlf=True)), "js"),
        (CleanOutcome(Path("c.md"), Status.PROCESSED, IssueSet(bom=True)), "other"),
        (CleanOutcome(Path("d.css"), Status.SKIPPED), "css"),
        (CleanOutcome(Path("e.txt"), Status.FAILED, IssueSet(bom=True), "replace", "boom"), "txt"),
    ]


def test_stats_breakdown():
    stats = RunStats()
    for outcome, category in _outcomes():
        stats.record(outcome, category)
    stats.record_error("access")

    assert (stats.processed, stats.skipped, stats.errors) == (3, 1, 2)
    assert (stats.bom_removed, stats.crlf_fixed) == (2, 2)
    assert stats.by_issue == {"BOM+CRLF": 1, "CRLF": 1, "BOM": 1}
    assert stats.by_category == {"php": 1, "js": 1, "other": 1}
    assert stats.by_error == {"replace": 1, "access": 1}
    assert stats.files == [Path("a.php"), Path("b.js"), Path("c.md")]
    assert stats.exit_code == 1


def test_clean_run_exits_zero():
    stats = RunStats()
    stats.record(CleanOutcome(Path("d.css"), Status.SKIPPED), "css")
    stats.record(CleanOutcome(Path("p.css"), Status.PREVIEW, IssueSet(crlf=True)), "css")
    assert stats.exit_code == 0
    assert stats.processed == 1


def test_write_csv(tmp_path):
    out = tmp_path / "reports" / "scan.csv"
    write_csv(out, [to_row(o, c) for o, c in _outcomes()])

    with out.open(encoding="utf-8", newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["status"] for r in rows] == ["processed", "processed", "processed", "skipped-clean", "failed"]
    assert rows[0]["issues"] == "BOM+CRLF"
    assert rows[4]["error_kind"] == "replace"
    assert rows[4]["error"] == "boom"
    assert rows[3]["size_bytes"] == "0"


def test_summary_lists_preview_files_and_errors():
    stats = RunStats()
    stats.record(CleanOutcome(Path("p.php"), Status.PREVIEW, IssueSet(bom=True)), "php")
    stats.record(CleanOutcome(Path("q.txt"), Status.FAILED, error_kind="size", error="too big"), "txt")
    buf = io.StringIO()

    print_summary(Console(stream=buf), stats, Settings(dry_run=True, verbose=True))

    text = buf.getvalue()
    assert "Files processed: 1" in text
    assert "BOM signatures removed: 1" in text
    assert ".php files: 1" in text
    assert "File size errors: 1" in text
    assert "Files That Would Be Processed" in text
    assert "p.php" in text
    assert "\033[" not in text
