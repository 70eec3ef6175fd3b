"""Unit tests for SiblingNavigator."""

import pytest

from safewalk.access_guard import AccessGuard, Unavailable
from safewalk.file_system.memory import MemoryFileSystem
from safewalk.path_identity import DirectoryRef
from safewalk.sibling import SiblingNavigator


@pytest.fixture
def fs():
    fs = MemoryFileSystem(volumes=("A:/", "B:/", "C:/"))
    # Deliberately not in sorted order: listing order is insertion order
    for path in ("A:/top/zeta", "A:/top/alpha", "A:/top/mid", "A:/top/last"):
        fs.add_directory(path)
    return fs


@pytest.fixture
def navigator(fs):
    return SiblingNavigator(AccessGuard(fs))


def ref(fs, path):
    return DirectoryRef(path, fs)


def test_next_sibling_follows_listing_order(fs, navigator):
    assert navigator.next_sibling(ref(fs, "A:/top/zeta")) == ref(fs, "A:/top/alpha")
    assert navigator.next_sibling(ref(fs, "A:/top/alpha")) == ref(fs, "A:/top/mid")


def test_last_directory_has_no_sibling(fs, navigator):
    assert navigator.next_sibling(ref(fs, "A:/top/last")) is None


def test_only_child_has_no_sibling(fs, navigator):
    assert navigator.next_sibling(ref(fs, "A:/top")) is None


def test_directory_located_by_identity(fs, navigator):
    sibling = navigator.next_sibling(ref(fs, "A:/top/zeta/"))
    assert sibling.path == "A:/top/alpha"


def test_inaccessible_siblings_are_skipped(fs, navigator):
    fs.fail("A:/top/alpha", "resolve")
    fs.fail("A:/top/mid", "resolve")
    assert navigator.next_sibling(ref(fs, "A:/top/zeta")) == ref(fs, "A:/top/last")


def test_all_later_siblings_inaccessible(fs, navigator):
    fs.fail("A:/top/last", "resolve")
    assert navigator.next_sibling(ref(fs, "A:/top/mid")) is None


def test_parent_listing_failure_is_unavailable(fs, navigator):
    fs.fail("A:/top", "list_directories")
    result = navigator.next_sibling(ref(fs, "A:/top/zeta"))
    assert isinstance(result, Unavailable)
    assert result.operation == "list_directories"


def test_unresolvable_directory_is_unavailable(fs, navigator):
    fs.remove("A:/top/mid")
    assert isinstance(navigator.next_sibling(ref(fs, "A:/top/mid")), Unavailable)


def test_parent_failure_is_unavailable(fs, navigator):
    fs.fail("A:/top/zeta", "parent")
    assert isinstance(navigator.next_sibling(ref(fs, "A:/top/zeta")), Unavailable)


def test_volume_root_moves_to_next_volume(fs, navigator):
    assert navigator.next_sibling(ref(fs, "A:/")).path == "B:/"
    assert navigator.next_sibling(ref(fs, "B:/")).path == "C:/"


def test_last_volume_has_no_sibling(fs, navigator):
    assert navigator.next_sibling(ref(fs, "C:/")) is None


def test_volume_names_compare_without_case():
    fs = MemoryFileSystem(volumes=("a:/", "B:/"), case_sensitive=False)
    navigator = SiblingNavigator(AccessGuard(fs))
    assert navigator.next_sibling(DirectoryRef("A:/", fs)).path == "B:/"


def test_volume_enumeration_failure_is_unavailable(fs, navigator):
    fs.fail_volumes()
    assert isinstance(navigator.next_sibling(ref(fs, "A:/")), Unavailable)


def test_volume_of(fs, navigator):
    assert navigator.volume_of(ref(fs, "A:/top/mid")) == "A:/"
    assert navigator.volume_of(ref(fs, "B:/")) == "B:/"


def test_volume_missing_from_list(fs, navigator, monkeypatch):
    monkeypatch.setattr(fs, "volumes", lambda: ["B:/", "C:/"])
    assert navigator.volume_of(ref(fs, "A:/top")) is None
    assert navigator.next_volume(ref(fs, "A:/top")) is None
