from __future__ import annotations

import os
from pathlib import Path

import pytest

from sanitizer.scratch import Workspace

BOM = b"\xef\xbb\xbf"


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    d = tmp_path / "scratch"
    d.mkdir()
    return d


@pytest.fixture
def workspace(scratch_dir: Path) -> Workspace:
    ws = Workspace(scratch_dir, run_id="4242-test")
    ws.check()
    return ws


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    d = tmp_path / "src"
    d.mkdir()
    return d


@pytest.fixture
def make_file(src_dir: Path):
    """Write bytes to a file under src_dir and pin its mtime to a known value."""

    def _make(name: str, data: bytes, mtime: int = 1_600_000_000) -> Path:
        p = src_dir / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        os.utime(p, (mtime, mtime))
        return p

    return _make
