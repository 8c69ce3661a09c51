# sanitizer/errors.py

"""Failure taxonomy for the clean operation.

Every per-file failure is a :class:`CleanError` whose ``kind`` is the key the
caller counts it under. ``ScratchUnavailable`` is the only error that aborts a
whole run.
"""
from __future__ import annotations


class CleanError(Exception):
    kind = "other"


class AccessDenied(CleanError):
    kind = "access"


class Unreadable(AccessDenied):
    """The file could not be stat'ed or opened for reading."""


class TooLarge(CleanError):
    kind = "size"

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"file is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit


class BackupFailed(CleanError):
    kind = "backup"


class WriteFailed(CleanError):
    kind = "write"


class ReplaceFailed(CleanError):
    kind = "replace"


class ScratchUnavailable(Exception):
    """The temporary-file area cannot be used; nothing can be rewritten safely."""


class AttributeRestoreWarning(UserWarning):
    """Owner, group or mode could not be re-applied to a rewritten file."""


class CleanupWarning(UserWarning):
    """A scratch, backup or staging file could not be removed after an operation."""
