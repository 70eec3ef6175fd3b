"""Unit tests for the in-memory file system."""

import pytest

from safewalk.file_system.memory import OPERATIONS, MemoryFileSystem


@pytest.fixture
def fs():
    fs = MemoryFileSystem(volumes=("/", "X:/"))
    fs.add_file("/data/b.txt")
    fs.add_file("/data/a.log")
    fs.add_directory("/data/sub")
    fs.add_file("X:/other.txt")
    return fs


def test_volume_names_must_end_with_separator():
    with pytest.raises(ValueError, match="must end with"):
        MemoryFileSystem(volumes=("C:",))


def test_at_least_one_volume():
    with pytest.raises(ValueError):
        MemoryFileSystem(volumes=())


def test_add_returns_full_path(fs):
    assert fs.add_file("/data/sub/c.txt") == "/data/sub/c.txt"
    assert fs.add_directory("/data/sub/") == "/data/sub"
    assert fs.add_directory("/") == "/"


def test_add_over_existing_entry_of_other_type(fs):
    with pytest.raises(FileExistsError):
        fs.add_directory("/data/b.txt")
    with pytest.raises(NotADirectoryError):
        fs.add_file("/data/b.txt/inner.txt")


def test_listings_in_insertion_order(fs):
    assert fs.list_files("/data", "*") == ["/data/b.txt", "/data/a.log"]
    assert fs.list_files("/data", "*.log") == ["/data/a.log"]
    assert fs.list_directories("/data") == ["/data/sub"]
    assert fs.list_directories("/") == ["/data"]


def test_listing_a_file_fails(fs):
    with pytest.raises(NotADirectoryError):
        fs.list_directories("/data/b.txt")


def test_resolve(fs):
    assert fs.resolve("/data/sub/") == "/data/sub"
    assert fs.resolve("X:/other.txt") == "X:/other.txt"
    with pytest.raises(FileNotFoundError):
        fs.resolve("/data/missing")
    with pytest.raises(FileNotFoundError, match="No such volume"):
        fs.resolve("Y:/anything")


def test_parent_is_lexical(fs):
    assert fs.parent("/data/sub") == "/data"
    assert fs.parent("/data") == "/"
    assert fs.parent("/") is None
    assert fs.parent("X:/other.txt") == "X:/"
    assert fs.parent("/not/there") == "/not"


def test_root_and_volumes(fs):
    assert fs.root("/data/sub") == "/"
    assert fs.root("X:/other.txt") == "X:/"
    assert fs.volumes() == ["/", "X:/"]


def test_bare_volume_name(fs):
    assert fs.root("X:") == "X:/"
    assert fs.parent("X:") is None


def test_case_insensitive():
    fs = MemoryFileSystem(case_sensitive=False)
    fs.add_file("/Data/Report.TXT")
    assert fs.resolve("/DATA/report.txt") == "/Data/Report.TXT"
    assert fs.list_files("/data", "*.txt") == ["/Data/Report.TXT"]
    assert fs.normcase("/Data") == "/data"


def test_case_sensitive(fs):
    assert fs.list_files("/data", "*.TXT") == []
    with pytest.raises(FileNotFoundError):
        fs.resolve("/DATA")
    assert fs.normcase("/Data") == "/Data"


def test_remove(fs):
    fs.remove("/data/sub")
    assert fs.list_directories("/data") == []
    with pytest.raises(FileNotFoundError):
        fs.resolve("/data/sub")
    with pytest.raises(PermissionError):
        fs.remove("/")


@pytest.mark.parametrize("operation", OPERATIONS)
def test_fail_single_operation(fs, operation):
    fs.fail("/data", operation)
    calls = {
        "resolve": lambda: fs.resolve("/data"),
        "list_directories": lambda: fs.list_directories("/data"),
        "list_files": lambda: fs.list_files("/data", "*"),
        "parent": lambda: fs.parent("/data"),
        "root": lambda: fs.root("/data"),
    }
    with pytest.raises(PermissionError, match=f"Simulated {operation} fault"):
        calls[operation]()
    for other, call in calls.items():
        if other != operation:
            call()


def test_fail_matches_any_spelling_of_the_path(fs):
    fs.fail("/data/")
    with pytest.raises(PermissionError):
        fs.resolve("/data")
    # Children are unaffected
    assert fs.resolve("/data/sub") == "/data/sub"


def test_fail_unknown_operation(fs):
    with pytest.raises(ValueError, match="Unknown operations: chmod"):
        fs.fail("/data", "chmod")


def test_fail_volumes(fs):
    fs.fail_volumes()
    with pytest.raises(PermissionError):
        fs.volumes()


def test_render_and_walk_all(fs):
    assert fs.walk_all() == ["/", "/data", "/data/b.txt", "/data/a.log", "/data/sub", "X:/", "X:/other.txt"]
    rendered = fs.render().splitlines()
    assert rendered[0] == "/"
    assert rendered[1].endswith("data/")
    assert rendered[2].endswith("b.txt")
    assert rendered[-1].endswith("other.txt")


def test_name(fs):
    assert fs.name("/data/b.txt") == "b.txt"
    assert fs.name("/data/sub/") == "sub"
    assert fs.separators() == "/"
