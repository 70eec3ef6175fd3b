"""End-to-end enumeration of real directory trees on the local disk."""

import os
import sys

import pytest

from safewalk import SearchMode, TraversalStrategy, enumerate_files

skip_if_privileged = pytest.mark.skipif(
    sys.platform == "win32" or os.geteuid() == 0, reason="permission bits are not enforced for this user"
)


@pytest.fixture(params=list(TraversalStrategy), ids=lambda s: s.value)
def strategy(request):
    return request.param


def names(root, *args, **kwargs):
    return [f.name for f in enumerate_files(root, *args, **kwargs)]


def test_recursive_walk_of_each_tree(resources, strategy):
    assert names(resources / "A", mode=SearchMode.RECURSIVE, strategy=strategy) == ["1.txt"]
    assert names(resources / "B", mode=SearchMode.RECURSIVE, strategy=strategy) == ["2.txt", "3.txt"]
    assert names(resources / "C", mode=SearchMode.RECURSIVE, strategy=strategy) == ["4.txt", "5.txt", "6.txt"]


def test_recursive_walk_of_nested_tree(resources, strategy):
    found = names(resources / "D", mode=SearchMode.RECURSIVE, strategy=strategy)
    assert found == ["6.txt", "7.bmp", "8.csv", "9.txt", "10.xls", "11.gif"]


def test_top_only_is_the_default(resources):
    assert names(resources / "D") == ["6.txt"]
    assert names(resources / "B") == []


def test_paths_are_absolute_and_usable(resources, strategy):
    for file in enumerate_files(resources / "B", mode="recursive", strategy=strategy):
        assert os.path.isabs(file.path)
        with open(file, encoding="utf-8") as handle:
            assert handle.read().endswith(file.name)


def test_relative_root(resources, monkeypatch, strategy):
    monkeypatch.chdir(resources)
    files = list(enumerate_files("C", mode="recursive", strategy=strategy))
    cwd = os.getcwd()
    assert [f.path for f in files] == [
        os.path.join(cwd, "C", "CA", "4.txt"),
        os.path.join(cwd, "C", "CA", "CAA", "5.txt"),
        os.path.join(cwd, "C", "CB", "6.txt"),
    ]


def test_exclusions(resources, strategy):
    root = resources / "D"
    assert names(root, [root / "DA", root / "DB"], mode="recursive", strategy=strategy) == [
        "6.txt",
        "10.xls",
        "11.gif",
    ]
    assert names(root, [root / "DC"], mode="recursive", strategy=strategy) == ["6.txt", "7.bmp", "8.csv", "9.txt"]


def test_pattern(resources, strategy):
    assert names(resources / "D", pattern="*.??s", mode="recursive", strategy=strategy) == ["10.xls"]


def test_pattern_in_top_only_mode(resources, strategy):
    assert names(resources / "D", pattern="*.txt", strategy=strategy) == ["6.txt"]
    assert names(resources / "D", pattern="*.txt", mode=SearchMode.TOP_ONLY, strategy=strategy) == ["6.txt"]
    assert names(resources / "D", pattern="*.??s", strategy=strategy) == []


def test_missing_root_yields_nothing(tmp_path, strategy):
    assert names(tmp_path / "missing", mode="recursive", strategy=strategy) == []


def test_file_as_root_yields_nothing(resources, strategy):
    assert names(resources / "A" / "1.txt", mode="recursive", strategy=strategy) == []


@skip_if_privileged
def test_unreadable_directory_is_skipped(resources, strategy):
    locked = resources / "D" / "DB"
    locked.chmod(0)
    try:
        found = names(resources / "D", mode="recursive", strategy=strategy)
    finally:
        locked.chmod(0o755)
    assert found == ["6.txt", "7.bmp", "8.csv", "10.xls", "11.gif"]


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks require privileges on Windows")
def test_broken_link_is_skipped(resources, strategy):
    os.symlink(resources / "nowhere", resources / "D" / "DD")
    os.symlink(resources / "nothing.txt", resources / "D" / "dangling.txt")
    found = names(resources / "D", mode="recursive", strategy=strategy)
    assert found == ["6.txt", "7.bmp", "8.csv", "9.txt", "10.xls", "11.gif"]


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks require privileges on Windows")
def test_directory_link_is_followed(resources, strategy):
    os.symlink(resources / "A", resources / "B" / "BC")
    assert names(resources / "B", mode="recursive", strategy=strategy) == ["2.txt", "3.txt", "1.txt"]


def test_directory_removed_mid_walk(resources, strategy):
    files = enumerate_files(resources / "D", mode="recursive", strategy=strategy)
    assert next(files).name == "6.txt"
    os.remove(resources / "D" / "DB" / "9.txt")
    os.rmdir(resources / "D" / "DB")
    assert [f.name for f in files] == ["7.bmp", "8.csv", "10.xls", "11.gif"]
