# sanitizer/model.py

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union

from .errors import AttributeRestoreWarning, CleanupWarning


@dataclass(frozen=True)
class IssueSet:
    """Encoding defects found in a file: any of BOM, CRLF, both or none."""
    bom: bool = False
    crlf: bool = False

    def __bool__(self) -> bool:
        return self.bom or self.crlf

    @property
    def label(self) -> str:
        """Short form used in logs and reports, e.g. ``BOM+CRLF``."""
        parts = []
        if self.bom:
            parts.append("BOM")
        if self.crlf:
            parts.append("CRLF")
        return "+".join(parts)


NO_ISSUES = IssueSet()


class Status(str, Enum):
    SKIPPED = "skipped-clean"
    PROCESSED = "processed"
    PREVIEW = "would-process"
    FAILED = "failed"


@dataclass(frozen=True)
class FileTarget:
    """Attributes of a file snapshotted right before it is rewritten."""
    path: Path
    size: int
    uid: int
    gid: int
    mode: int         # permission bits only (S_IMODE)
    atime_ns: int
    mtime_ns: int


@dataclass
class CleanOutcome:
    """Result of one clean operation on one path."""
    path: Path
    status: Status
    issues: IssueSet = NO_ISSUES
    error_kind: str = ""     # failure taxonomy kind, empty unless failed
    error: str = ""
    warnings: List[Union[AttributeRestoreWarning, CleanupWarning]] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status is Status.FAILED


@dataclass
class ScanRow:
    """Represents a row in the scan report CSV."""
    path: str
    size_bytes: int
    category: str     # matched extension or "other"
    issues: str       # "", BOM, CRLF, BOM+CRLF
    status: str       # one of: skipped-clean | processed | would-process | failed
    error_kind: str
    error: str
