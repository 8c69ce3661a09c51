# sanitizer/rewrite.py

"""Atomic in-place rewrite of a single file.

The target is replaced in one ``os.replace`` call, so any reader sees either
the original bytes or the complete cleaned bytes. The scratch copy and the
backup live in the run's :class:`~sanitizer.scratch.Workspace` and are
removed before :func:`clean` returns, whatever the outcome; one that cannot be
removed is reported as a :class:`~sanitizer.errors.CleanupWarning`.
"""
from __future__ import annotations
import errno
import os
import shutil
import stat
from pathlib import Path
from typing import List, Optional

from .detect import detect
from .errors import (
    AccessDenied,
    AttributeRestoreWarning,
    BackupFailed,
    CleanError,
    CleanupWarning,
    ReplaceFailed,
    WriteFailed,
)
from .model import CleanOutcome, FileTarget, IssueSet, Status
from .scratch import Workspace
from .settings import DEFAULT_MAX_SIZE
from .transform import clean_stream

_O_BINARY = getattr(os, "O_BINARY", 0)


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _check_access(path: Path, need_write: bool) -> None:
    try:
        readable = os.access(path, os.R_OK)
        writable = not need_write or os.access(path, os.W_OK)
    except ValueError as exc:
        # e.g. an embedded NUL byte
        raise AccessDenied(f"invalid path: {exc}") from exc
    if not readable:
        raise AccessDenied("cannot read file")
    if not writable:
        raise AccessDenied("cannot write to file")


def _snapshot(path: Path) -> FileTarget:
    try:
        st = os.stat(path)
    except OSError as exc:
        raise AccessDenied(f"cannot get file attributes: {_reason(exc)}") from exc
    return FileTarget(
        path=path,
        size=st.st_size,
        uid=st.st_uid,
        gid=st.st_gid,
        mode=stat.S_IMODE(st.st_mode),
        atime_ns=st.st_atime_ns,
        mtime_ns=st.st_mtime_ns,
    )


def _open_private(p: Path):
    fd = os.open(p, os.O_WRONLY | os.O_CREAT | os.O_EXCL | _O_BINARY, 0o600)
    return os.fdopen(fd, "wb")


def _write_scratch(target: FileTarget, scratch: Path) -> None:
    try:
        with target.path.open("rb") as src, _open_private(scratch) as dst:
            clean_stream(src, dst)
            dst.flush()
            os.fsync(dst.fileno())
    except OSError as exc:
        raise WriteFailed(f"failed to process file content: {_reason(exc)}") from exc


def _write_backup(target: FileTarget, backup: Path) -> None:
    try:
        shutil.copy2(target.path, backup)
    except OSError as exc:
        raise BackupFailed(f"failed to create backup: {_reason(exc)}") from exc


def _is_intact(target: FileTarget) -> bool:
    try:
        st = os.stat(target.path)
    except OSError:
        return False
    return st.st_size == target.size and st.st_mtime_ns == target.mtime_ns


def _rollback(target: FileTarget, backup: Path) -> List[AttributeRestoreWarning]:
    """Put the backup back in place unless the original is still untouched."""
    if _is_intact(target):
        return []
    shutil.move(str(backup), str(target.path))
    return _restore_attributes(target)


def _replace_via_staging(scratch: Path, target: FileTarget, workspace: Workspace) -> None:
    # The scratch area is on another filesystem; os.replace is only atomic
    # within one, so the bytes are first copied next to the target.
    with workspace.staged(target.path) as part:
        with scratch.open("rb") as src, _open_private(part) as dst:
            shutil.copyfileobj(src, dst)
            dst.flush()
            os.fsync(dst.fileno())
        os.replace(part, target.path)


def _replace(scratch: Path, backup: Path, target: FileTarget, workspace: Workspace) -> None:
    try:
        try:
            os.replace(scratch, target.path)
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise
            _replace_via_staging(scratch, target, workspace)
    except OSError as exc:
        msg = f"failed to replace original file: {_reason(exc)}"
        try:
            restore_warnings = _rollback(target, backup)
        except OSError as rb_exc:
            raise ReplaceFailed(f"{msg}; restore from backup also failed: {_reason(rb_exc)}") from exc
        if restore_warnings:
            msg += "; restored from backup, but " + "; ".join(str(w) for w in restore_warnings)
        raise ReplaceFailed(msg) from exc


def _restore_attributes(target: FileTarget) -> List[AttributeRestoreWarning]:
    """Re-apply owner, group, mode and timestamps from the snapshot.

    Owner and mode problems are returned as warnings; they do not fail the
    operation.
    """
    warnings: List[AttributeRestoreWarning] = []
    path = target.path
    if hasattr(os, "chown"):
        try:
            st = os.stat(path)
            if (st.st_uid, st.st_gid) != (target.uid, target.gid):
                os.chown(path, target.uid, target.gid)
        except OSError as exc:
            warnings.append(AttributeRestoreWarning(
                f"could not restore ownership {target.uid}:{target.gid}: {_reason(exc)}"
            ))
    try:
        os.chmod(path, target.mode)
    except OSError as exc:
        warnings.append(AttributeRestoreWarning(
            f"could not restore permissions {target.mode:o}: {_reason(exc)}"
        ))
    # last, so nothing above bumps the times again
    try:
        os.utime(path, ns=(target.atime_ns, target.mtime_ns))
    except OSError as exc:
        warnings.append(AttributeRestoreWarning(f"could not restore timestamps: {_reason(exc)}"))
    return warnings


def _rewrite(path: Path, workspace: Workspace) -> List[AttributeRestoreWarning]:
    target = _snapshot(path)
    with workspace.artifacts(path) as (scratch, backup):
        _write_scratch(target, scratch)
        _write_backup(target, backup)
        _replace(scratch, backup, target, workspace)
        return _restore_attributes(target)


def _cleanup_warnings(workspace: Workspace) -> List[CleanupWarning]:
    return [
        CleanupWarning(f"could not remove {p}: {_reason(exc)}")
        for p, exc in workspace.take_cleanup_failures()
    ]


# --- public API -----------------------------------------------------------------


def clean(
    path: Path,
    *,
    size_limit: int = DEFAULT_MAX_SIZE,
    preview: bool = False,
    workspace: Optional[Workspace] = None,
) -> CleanOutcome:
    """Remove a leading BOM and CRLF line endings from ``path`` in place.

    Files with nothing to fix are left alone, including their mtime. In
    preview mode only the detector runs and nothing is written anywhere.

    Args:
        path (Path): File to clean.
        size_limit (int): Larger files are reported as ``size`` failures.
        preview (bool): Classify only; report ``would-process`` for dirty files.
        workspace (Workspace | None): Scratch area of the current run.

    Returns:
        CleanOutcome: Exactly one outcome; per-file errors are never raised.
    """
    path = Path(path)
    workspace = workspace or Workspace()
    issues = IssueSet()
    try:
        _check_access(path, need_write=not preview)
        issues = detect(path, size_limit)
        if not issues:
            return CleanOutcome(path, Status.SKIPPED)
        if preview:
            return CleanOutcome(path, Status.PREVIEW, issues)
        warnings = _rewrite(path, workspace)
    except CleanError as exc:
        return CleanOutcome(
            path, Status.FAILED, issues,
            error_kind=exc.kind, error=str(exc), warnings=_cleanup_warnings(workspace),
        )
    return CleanOutcome(path, Status.PROCESSED, issues, warnings=warnings + _cleanup_warnings(workspace))
