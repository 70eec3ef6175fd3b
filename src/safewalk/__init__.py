"""Resilient directory-tree walking.

This package enumerates the files below a directory while tolerating permission
errors, entries that disappear mid-walk and broken links, and supports pruning
whole subtrees from the walk.
"""

from importlib.metadata import PackageNotFoundError, version

from safewalk.exclusion import ExclusionSet
from safewalk.file_system import FileSystem, LocalFileSystem, MemoryFileSystem
from safewalk.lock_probe import is_locked
from safewalk.path_identity import DirectoryRef, FileRef
from safewalk.types import SearchMode, TraversalStrategy, UpwardFaultPolicy
from safewalk.walker import TreeWalker, enumerate_files

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("safewalk")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "DirectoryRef",
    "ExclusionSet",
    "FileRef",
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "SearchMode",
    "TraversalStrategy",
    "TreeWalker",
    "UpwardFaultPolicy",
    "enumerate_files",
    "is_locked",
]
