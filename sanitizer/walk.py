# sanitizer/walk.py

from __future__ import annotations
from pathlib import Path
from typing import Iterable, Iterator

from .settings import SUPPORTED_EXTENSIONS


def extension_of(path: Path) -> str:
    """Lowercased extension without the dot ("" when there is none)."""
    return path.suffix[1:].lower() if path.suffix else ""


def categorize(path: Path, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> str:
    """Return the file's extension if it is a supported one, else ``"other"``."""
    ext = extension_of(path)
    return ext if ext in set(extensions) else "other"


def _is_candidate(p: Path, wanted: set) -> bool:
    if not p.is_file() or extension_of(p) not in wanted:
        return False
    try:
        return p.stat().st_size > 0
    except OSError:
        return False


def iter_files(root: Path, extensions: Iterable[str] = SUPPORTED_EXTENSIONS) -> Iterator[Path]:
    """Iterate over candidate files under a path, recursively if it's a directory.

    A file given directly is yielded as is, whatever its extension. Inside a
    directory only non-empty regular files with a supported extension are
    yielded, in sorted order.

    Args:
        root (Path): File or directory to scan.
        extensions (Iterable[str]): Extensions (no dot, lowercase) to pick up.

    Yields:
        Path: Paths to each file found.
    """
    if root.is_file():
        yield root
        return

    wanted = {e.lower() for e in extensions}
    for p in sorted(root.rglob("*")):
        if _is_candidate(p, wanted):
            yield p
