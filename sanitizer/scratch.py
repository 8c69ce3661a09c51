# sanitizer/scratch.py

"""Per-run scratch area for the scratch and backup copies of a clean operation.

Every artifact name carries the run id, so whatever an interrupted run leaves
behind can be found and removed by :meth:`Workspace.sweep`.
"""
from __future__ import annotations
import contextlib
import os
import tempfile
import uuid
from pathlib import Path
from typing import Iterator, List, Optional, Set, Tuple

from .errors import ScratchUnavailable
from .settings import PROG


def _unlink_quiet(p: Path) -> bool:
    """Remove a file if it exists. Returns True when something was removed."""
    try:
        p.unlink()
        return True
    except FileNotFoundError:
        return False


class Workspace:
    """Scratch directory plus the naming scheme for one run's artifacts."""

    def __init__(self, temp_dir: Optional[Path] = None, run_id: Optional[str] = None) -> None:
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self.run_id = run_id or f"{os.getpid()}-{uuid.uuid4().hex[:8]}"
        self._staged: Set[Path] = set()
        self.cleanup_failures: List[Tuple[Path, OSError]] = []

    @property
    def prefix(self) -> str:
        return f"{PROG}.{self.run_id}."

    def scratch_path(self, target: Path) -> Path:
        return self.temp_dir / f"{self.prefix}{target.name}.tmp"

    def backup_path(self, target: Path) -> Path:
        return self.temp_dir / f"{self.prefix}{target.name}.bak"

    def staging_path(self, target: Path) -> Path:
        """Hidden sibling of ``target`` used when the scratch area is on another device."""
        return target.parent / f".{target.name}.{PROG}.{self.run_id}.part"

    def check(self) -> None:
        """Make sure the scratch directory exists and accepts new files.

        Raises:
            ScratchUnavailable: The directory is missing or not writable.
        """
        if not self.temp_dir.is_dir():
            raise ScratchUnavailable(f"temp directory does not exist: {self.temp_dir}")
        marker = self.temp_dir / f"{self.prefix}check"
        try:
            fd = os.open(marker, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            os.close(fd)
            marker.unlink()
        except OSError as exc:
            raise ScratchUnavailable(
                f"no write access to temp directory {self.temp_dir}: {exc.strerror or exc}"
            ) from exc

    @contextlib.contextmanager
    def artifacts(self, target: Path) -> Iterator[Tuple[Path, Path]]:
        """Yield ``(scratch, backup)`` paths for ``target`` and remove both on exit.

        A file that cannot be removed is left for :meth:`sweep` and recorded in
        :attr:`cleanup_failures`.
        """
        scratch = self.scratch_path(target)
        backup = self.backup_path(target)
        try:
            yield scratch, backup
        finally:
            self._discard(scratch)
            self._discard(backup)

    @contextlib.contextmanager
    def staged(self, target: Path) -> Iterator[Path]:
        """Yield a staging path next to ``target``; it is removed on exit unless consumed."""
        part = self.staging_path(target)
        self._staged.add(part)
        try:
            yield part
        finally:
            if self._discard(part):
                self._staged.discard(part)

    def _discard(self, p: Path) -> bool:
        """Best-effort removal. Returns False when the file is still there."""
        try:
            _unlink_quiet(p)
        except OSError as exc:
            self.cleanup_failures.append((p, exc))
            return False
        return True

    def take_cleanup_failures(self) -> List[Tuple[Path, OSError]]:
        """Return and forget the removal failures recorded so far."""
        failures, self.cleanup_failures = self.cleanup_failures, []
        return failures

    def leftovers(self) -> list:
        """Artifacts of this run still present on disk."""
        found = [p for p in self.temp_dir.glob(f"{self.prefix}*") if p.is_file()]
        found.extend(p for p in self._staged if p.exists())
        return sorted(found)

    def sweep(self) -> int:
        """Delete every artifact of this run. Returns how many files were removed."""
        removed = 0
        for p in self.leftovers():
            try:
                removed += _unlink_quiet(p)
            except OSError:
                continue
        self._staged.clear()
        return removed
