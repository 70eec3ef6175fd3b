"""Tests for the file lock probe."""

import os
import sys

import pytest

from safewalk.lock_probe import is_locked

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses flock")


@pytest.fixture
def target(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"payload")
    return path


def test_unlocked_file(target):
    assert is_locked(target) is False


def test_missing_file(tmp_path):
    assert is_locked(tmp_path / "missing.bin") is False


def test_directory_is_not_locked(tmp_path):
    assert is_locked(tmp_path) is False


@posix_only
def test_file_locked_by_another_holder(target):
    import fcntl

    with open(target, "rb") as holder:
        fcntl.flock(holder.fileno(), fcntl.LOCK_EX)
        assert is_locked(target) is True
        fcntl.flock(holder.fileno(), fcntl.LOCK_UN)
        assert is_locked(target) is False


@posix_only
def test_probe_releases_its_own_lock(target):
    import fcntl

    assert is_locked(target) is False
    with open(target, "rb") as holder:
        # Would fail with BlockingIOError if the probe had kept its lock
        fcntl.flock(holder.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        fcntl.flock(holder.fileno(), fcntl.LOCK_UN)


@posix_only
@pytest.mark.skipif(os.name == "posix" and os.geteuid() == 0, reason="root can open any file")
def test_unreadable_file_is_not_locked(target):
    target.chmod(0)
    try:
        assert is_locked(target) is False
    finally:
        target.chmod(0o644)


def test_descriptor_is_closed(target, monkeypatch):
    closed = []
    real_close = os.close

    def tracking_close(fd):
        closed.append(fd)
        real_close(fd)

    monkeypatch.setattr(os, "close", tracking_close)
    is_locked(target)
    assert len(closed) == 1
