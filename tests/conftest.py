"""Test configuration and fixtures for safewalk."""

from pathlib import Path

import pytest

from safewalk.file_system.memory import MemoryFileSystem

# Layout of the trees walked by the enumeration tests. Names are chosen so that
# sorted listings give the intended pre-order.
RESOURCE_FILES = (
    "A/1.txt",
    "B/BA/2.txt",
    "B/BB/3.txt",
    "C/CA/4.txt",
    "C/CA/CAA/5.txt",
    "C/CB/6.txt",
    "D/6.txt",
    "D/DA/7.bmp",
    "D/DA/8.csv",
    "D/DB/9.txt",
    "D/DC/10.xls",
    "D/DC/DCA/11.gif",
)


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def resources(tmp_path) -> Path:
    """Create the resource trees on the local disk and return their parent."""
    for relative in RESOURCE_FILES:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(relative)
    return tmp_path


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    """Create the resource trees in memory, under /res."""
    fs = MemoryFileSystem()
    for relative in RESOURCE_FILES:
        fs.add_file(f"/res/{relative}")
    return fs
