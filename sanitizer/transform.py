# sanitizer/transform.py

"""Byte-level BOM and CRLF removal.

Works on raw bytes with plain scanning so the result never depends on the
locale or on how a text codec treats a BOM.
"""
from __future__ import annotations
from typing import BinaryIO

from .detect import BOM

CR = b"\r"
LF = b"\n"
CRLF = CR + LF

CHUNK_SIZE = 1024 * 1024


def _crlf_to_lf(buf: bytes) -> bytes:
    """Drop every CR that sits directly before an LF (``\\r\\r\\n`` -> ``\\n``)."""
    if CRLF not in buf:
        return buf
    # single pass: every piece except the last was followed by an LF
    pieces = buf.split(LF)
    last = pieces.pop()
    return LF.join([p.rstrip(CR) for p in pieces] + [last])


def clean_bytes(data: bytes) -> bytes:
    """Return ``data`` without a leading BOM and with CRLF turned into LF.

    A BOM is only removed at offset 0, and a lone CR not followed by LF is kept.
    """
    if data.startswith(BOM):
        data = data[len(BOM):]
    return _crlf_to_lf(data)


def clean_stream(src: BinaryIO, dst: BinaryIO, chunk_size: int = CHUNK_SIZE) -> int:
    """Copy ``src`` to ``dst`` applying :func:`clean_bytes` chunk by chunk.

    A run of CRs at the end of a chunk is only counted, and written or
    dropped once the next chunk shows whether an LF follows it.

    Returns:
        int: Number of bytes written to ``dst``.
    """
    written = 0
    pending = 0  # CRs held back from the end of the previous chunk
    head = src.read(len(BOM))
    chunk = b"" if head == BOM else head
    while True:
        chunk += src.read(chunk_size)
        if not chunk:
            break
        rest = chunk.lstrip(CR)
        if not rest:
            pending += len(chunk)
            chunk = b""
            continue
        if pending or len(rest) != len(chunk):
            if rest.startswith(LF):
                chunk = rest
            else:
                chunk = CR * pending + chunk
            pending = 0
        body = chunk.rstrip(CR)
        pending = len(chunk) - len(body)
        out = _crlf_to_lf(body)
        dst.write(out)
        written += len(out)
        chunk = b""
    dst.write(CR * pending)
    return written + pending
