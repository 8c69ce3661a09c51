# sanitizer/detect.py

from __future__ import annotations
from pathlib import Path

from .errors import TooLarge, Unreadable
from .model import IssueSet
from .settings import DEFAULT_MAX_SIZE

BOM = b"\xEF\xBB\xBF"
CRLF = b"\r\n"

# Only this many leading bytes are scanned for CRLF. A file whose first CRLF
# sits past the window is reported clean.
CRLF_WINDOW = 1024


# --- sniffers -------------------------------------------------------------------


def _read_head(p: Path, size_limit: int) -> bytes:
    """Return the first CRLF_WINDOW bytes of a file after checking its size."""
    try:
        size = p.stat().st_size
    except OSError as exc:
        raise Unreadable(f"cannot stat: {exc.strerror or exc}") from exc
    if size > size_limit:
        raise TooLarge(size, size_limit)
    try:
        with p.open("rb") as f:
            return f.read(CRLF_WINDOW)
    except OSError as exc:
        raise Unreadable(f"cannot open: {exc.strerror or exc}") from exc


def _has_bom(head: bytes) -> bool:
    return head[:3] == BOM


def _has_crlf(head: bytes) -> bool:
    return CRLF in head[:CRLF_WINDOW]


# --- public API -----------------------------------------------------------------


def detect(path: Path, size_limit: int = DEFAULT_MAX_SIZE) -> IssueSet:
    """Report whether a file starts with a UTF-8 BOM and/or has CRLF line ends.

    Only the first 3 bytes (BOM) and the first 1024 bytes (CRLF) are read, so
    the cost does not grow with the file.

    Args:
        path (Path): File to inspect.
        size_limit (int): Files larger than this are not inspected.

    Returns:
        IssueSet: The defects found; falsy when the file is clean.

    Raises:
        Unreadable: The file cannot be stat'ed or opened.
        TooLarge: The file is larger than ``size_limit``.
    """
    head = _read_head(Path(path), size_limit)
    return IssueSet(bom=_has_bom(head), crlf=_has_crlf(head))
