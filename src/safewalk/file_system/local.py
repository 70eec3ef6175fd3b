"""File system backed by the operating system."""

import fnmatch
import os
import string
from typing import List, Optional

from .base import FileSystem


def _is_directory(entry: "os.DirEntry[str]") -> bool:
    try:
        return entry.is_dir()
    except OSError:
        # If we can't stat it, treat it as a non-directory
        return False


def _is_file(entry: "os.DirEntry[str]") -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


class LocalFileSystem(FileSystem):
    """The local operating system's file system.

    Listings come from ``os.scandir`` and are sorted by name so that repeated walks
    over an unchanged tree are identical. Links are followed when classifying
    entries, and a link whose target is missing is neither a file nor a directory.

    Case folding follows ``os.path.normcase``: paths are folded on Windows and left
    untouched elsewhere.

    Example:
        >>> fs = LocalFileSystem()
        >>> fs.parent(fs.root(".")) is None
        True
    """

    sep = os.sep
    altsep = os.altsep

    def resolve(self, path: str) -> str:
        # Prove the entry exists (following links) before handing out its absolute form
        os.stat(path)
        return os.path.abspath(path)

    def list_directories(self, path: str) -> List[str]:
        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries if _is_directory(entry))
        return [os.path.join(path, name) for name in names]

    def list_files(self, path: str, pattern: str) -> List[str]:
        with os.scandir(path) as entries:
            names = sorted(entry.name for entry in entries if _is_file(entry) and fnmatch.fnmatch(entry.name, pattern))
        return [os.path.join(path, name) for name in names]

    def parent(self, path: str) -> Optional[str]:
        absolute = os.path.abspath(path)
        head = os.path.dirname(absolute)
        if head == absolute:
            return None
        return head

    def root(self, path: str) -> str:
        drive, _ = os.path.splitdrive(os.path.abspath(path))
        return drive + self.sep

    def volumes(self) -> List[str]:
        if os.name != "nt":
            return [self.sep]
        listdrives = getattr(os, "listdrives", None)
        if listdrives is not None:
            return list(listdrives())
        return [f"{letter}:\\" for letter in string.ascii_uppercase if os.path.exists(f"{letter}:\\")]

    def normcase(self, path: str) -> str:
        return os.path.normcase(path)
