from __future__ import annotations

import os
import signal

import pytest

import tuxstart.workspace as workspace_mod
from tuxstart.workspace import TempWorkspace


def test_workspace_exists_inside_and_is_removed_after(tmp_path):
    with TempWorkspace(parent=str(tmp_path)) as ws:
        assert ws.path.is_dir()
        (ws.path / "download.tar.gz").write_bytes(b"x")

    assert not ws.path.exists()
    assert ws.removals == 1


def test_removed_on_exception(tmp_path):
    ws = TempWorkspace(parent=str(tmp_path))

    with pytest.raises(ValueError):
        with ws:
            raise ValueError("boom")

    assert not ws.path.exists()


def test_cleanup_happens_once(tmp_path):
    with TempWorkspace(parent=str(tmp_path)) as ws:
        ws.cleanup()
        assert not ws.path.exists()

    assert ws.removals == 1


def test_sigterm_unwinds_and_cleans_up(tmp_path):
    before = signal.getsignal(signal.SIGTERM)
    ws = TempWorkspace(parent=str(tmp_path))

    with pytest.raises(SystemExit) as exc:
        with ws:
            signal.raise_signal(signal.SIGTERM)

    assert exc.value.code == 128 + signal.SIGTERM
    assert not ws.path.exists()
    assert signal.getsignal(signal.SIGTERM) is before


def test_sub_paths_live_inside_workspace(tmp_path):
    with TempWorkspace(parent=str(tmp_path)) as ws:
        assert os.path.dirname(ws.sub("fastfetch")) == ws.root

    with pytest.raises(RuntimeError):
        TempWorkspace().sub("x")


def test_sighup_unwinds_and_cleans_up(tmp_path):
    before = signal.getsignal(signal.SIGHUP)
    ws = TempWorkspace(parent=str(tmp_path))

    with pytest.raises(SystemExit) as exc:
        with ws:
            (ws.path / "partial.tar.gz").write_bytes(b"x")
            signal.raise_signal(signal.SIGHUP)

    assert exc.value.code == 128 + signal.SIGHUP
    assert not ws.path.exists()
    assert ws.removals == 1
    assert signal.getsignal(signal.SIGHUP) is before


def test_failed_removal_is_not_reported_as_removed(tmp_path, monkeypatch, caplog):
    def stuck(path, **kwargs):
        callback = kwargs.get("onexc") or kwargs.get("onerror")
        callback(os.rmdir, str(path), PermissionError(13, "Permission denied"))

    monkeypatch.setattr(workspace_mod.shutil, "rmtree", stuck)

    with caplog.at_level("INFO", logger="tuxstart.workspace"):
        with TempWorkspace(parent=str(tmp_path)) as ws:
            pass

    assert ws.path.exists()
    assert not ws.removed
    assert ws.removals == 1
    assert "Could not remove" in caplog.text
    assert "was not fully removed" in caplog.text
    assert "Removed workspace" not in caplog.text
