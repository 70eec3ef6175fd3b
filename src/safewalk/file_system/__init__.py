"""Filesystem query surfaces used by the walker.

This package defines the abstract set of read-only primitives the walker relies
on, an implementation backed by the operating system, and an in-memory
implementation with fault injection for tests and simulations.
"""

from .base import FileSystem
from .local import LocalFileSystem
from .memory import MemoryFileSystem
from .memory_node import MemoryNode

__all__ = [
    "FileSystem",
    "LocalFileSystem",
    "MemoryFileSystem",
    "MemoryNode",
]
