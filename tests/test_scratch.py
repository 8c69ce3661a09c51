from __future__ import annotations

import os
import re

import pytest

from sanitizer.errors import ScratchUnavailable
from sanitizer import scratch
from sanitizer.scratch import Workspace


def test_default_run_id_embeds_pid(tmp_path):
    ws = Workspace(tmp_path)
    assert re.fullmatch(rf"{os.getpid()}-[0-9a-f]{{8}}", ws.run_id)
    assert Workspace(tmp_path).run_id != ws.run_id


def test_artifact_names_are_keyed_on_run_and_target(workspace, tmp_path):
    target = tmp_path / "src" / "index.php"
    assert workspace.scratch_path(target).name == "clean-bom.4242-test.index.php.tmp"
    assert workspace.backup_path(target).name == "clean-bom.4242-test.index.php.bak"
    assert workspace.scratch_path(target).parent == workspace.temp_dir
    staging = workspace.staging_path(target)
    assert staging.parent == target.parent
    assert staging.name.startswith(".index.php.")


def test_check_rejects_missing_dir(tmp_path):
    with pytest.raises(ScratchUnavailable):
        Workspace(tmp_path / "missing").check()


def test_check_rejects_unwritable_dir(tmp_path, monkeypatch):
    def no_create(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(scratch.os, "open", no_create)
    with pytest.raises(ScratchUnavailable, match="Permission denied"):
        Workspace(tmp_path).check()


def test_check_leaves_nothing_behind(workspace):
    workspace.check()
    assert list(workspace.temp_dir.iterdir()) == []


def test_artifacts_are_removed_even_on_error(workspace, tmp_path):
    target = tmp_path / "f.txt"
    with pytest.raises(RuntimeError):
        with workspace.artifacts(target) as (scratch, backup):
            scratch.write_bytes(b"s")
            backup.write_bytes(b"b")
            raise RuntimeError("boom")
    assert not scratch.exists()
    assert not backup.exists()


def test_sweep_removes_only_this_runs_files(workspace, src_dir):
    mine = workspace.temp_dir / f"{workspace.prefix}a.txt.tmp"
    mine.write_bytes(b"x")
    other = workspace.temp_dir / "clean-bom.1-other.a.txt.tmp"
    other.write_bytes(b"y")

    with pytest.raises(KeyboardInterrupt):
        with workspace.staged(src_dir / "a.txt") as part:
            part.write_bytes(b"z")
            assert workspace.leftovers() == sorted([mine, part])
            raise KeyboardInterrupt

    assert workspace.sweep() == 1
    assert not mine.exists()
    assert other.exists()
    assert list(src_dir.iterdir()) == []
