from __future__ import annotations

import io
import time

import pytest

from sanitizer.transform import clean_bytes, clean_stream

BOM = b"\xef\xbb\xbf"
SAMPLE = BOM + b"a\r\nb\r\r\nc\rd\r\n\r\nmid" + BOM + b"\r"
EXPECTED = b"a\nb\nc\rd\n\nmid" + BOM + b"\r"


def test_clean_bytes():
    assert clean_bytes(SAMPLE) == EXPECTED


def test_clean_bytes_keeps_clean_input():
    assert clean_bytes(b"already\nclean\n") == b"already\nclean\n"


def test_bom_removed_only_once():
    assert clean_bytes(BOM + BOM + b"x") == BOM + b"x"


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 7, 64, 1024 * 1024])
def test_clean_stream_matches_clean_bytes_on_any_chunking(chunk_size):
    dst = io.BytesIO()
    written = clean_stream(io.BytesIO(SAMPLE), dst, chunk_size=chunk_size)
    assert dst.getvalue() == EXPECTED
    assert written == len(EXPECTED)


def test_clean_stream_short_inputs():
    for data in (b"", b"\r", b"\r\n", b"ab", BOM, BOM + b"\r\n"):
        dst = io.BytesIO()
        clean_stream(io.BytesIO(data), dst, chunk_size=1)
        assert dst.getvalue() == clean_bytes(data)


def test_clean_stream_cr_run_split_across_chunks():
    data = b"x" + b"\r" * 10 + b"\n" + b"y"
    dst = io.BytesIO()
    clean_stream(io.BytesIO(data), dst, chunk_size=4)
    assert dst.getvalue() == b"x\ny"


def test_long_cr_run_is_removed_in_one_pass():
    data = b"a\r\n" + b"\r" * 200_000 + b"\nend\n"
    started = time.perf_counter()
    out = clean_bytes(data)
    assert time.perf_counter() - started < 2.0
    assert out == b"a\n\nend\n"


def test_long_cr_run_streamed_across_chunks():
    data = b"a\r\n" + b"\r" * 200_000 + b"\nend\r"
    dst = io.BytesIO()
    started = time.perf_counter()
    clean_stream(io.BytesIO(data), dst, chunk_size=4096)
    assert time.perf_counter() - started < 2.0
    assert dst.getvalue() == b"a\n\nend\r"
