# sanitizer/stats.py

from __future__ import annotations
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .model import CleanOutcome, Status

ERROR_KINDS = ("access", "size", "backup", "write", "replace", "other")


@dataclass
class RunStats:
    """Aggregate counters for one run, fed only with returned outcomes."""
    processed: int = 0
    skipped: int = 0
    errors: int = 0
    bom_removed: int = 0
    crlf_fixed: int = 0
    by_issue: Counter = field(default_factory=Counter)      # "BOM", "CRLF", "BOM+CRLF"
    by_category: Counter = field(default_factory=Counter)   # "php", ..., "other"
    by_error: Counter = field(default_factory=Counter)      # failure kind
    files: List[Path] = field(default_factory=list)
    started: float = field(default_factory=time.monotonic)

    def record(self, outcome: CleanOutcome, category: str) -> None:
        if outcome.status is Status.SKIPPED:
            self.skipped += 1
            return
        if outcome.status is Status.FAILED:
            self.errors += 1
            self.by_error[outcome.error_kind or "other"] += 1
            return

        # processed, or would be in preview mode
        self.processed += 1
        self.files.append(outcome.path)
        self.by_category[category] += 1
        self.by_issue[outcome.issues.label] += 1
        if outcome.issues.bom:
            self.bom_removed += 1
        if outcome.issues.crlf:
            self.crlf_fixed += 1

    def record_error(self, kind: str) -> None:
        """Count a failure that happened before a clean operation could start."""
        self.errors += 1
        self.by_error[kind] += 1

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self.started

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 0
