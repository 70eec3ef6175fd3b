"""Comparable identities for filesystem entries.

Two listings of the same directory may spell its path differently: with or
without a trailing separator, relative or absolute, or in a different case on a
case-insensitive file system. The canonical form collapses those spellings so
that entries can be compared for equality.
"""

import os
from dataclasses import dataclass
from typing import Any, Optional

from safewalk.exceptions import UnresolvablePathError
from safewalk.file_system.base import FileSystem
from safewalk.types import PathType


def canonical(file_system: FileSystem, path: PathType) -> str:
    """Return the comparison-ready form of a path.

    The entry is resolved to its absolute form, trailing separators are removed
    and the result is case-folded per the file system's rules. A volume root keeps one
    separator, so ``/`` and ``C:\\`` stay roots rather than becoming ``""`` or the
    drive-relative ``C:``.

    Args:
        file_system: The file system the path belongs to.
        path: The path to canonicalize.

    Returns:
        The canonical path string.

    Raises:
        UnresolvablePathError: If the entry cannot be resolved.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem(case_sensitive=False)
        >>> _ = fs.add_directory("/Projects/Alpha")
        >>> canonical(fs, "/projects/ALPHA/")
        '/projects/alpha'
        >>> canonical(fs, "//")
        '/'
        >>> canonical(fs, "/missing")
        Traceback (most recent call last):
        ...
        safewalk.exceptions.UnresolvablePathError: Cannot resolve path: /missing ([Errno 2] No such file or directory: '/missing')
    """
    text = os.fspath(path)
    try:
        resolved = file_system.resolve(text)
    except (OSError, ValueError) as e:
        raise UnresolvablePathError(text, e) from e
    separators = file_system.separators()
    stripped = resolved.rstrip(separators)
    # An absolute path with no separator left was a bare volume root
    if stripped != resolved and not any(separator in stripped for separator in separators):
        stripped = resolved[: len(stripped) + 1]
    return file_system.normcase(stripped)


def paths_equal(file_system: FileSystem, first: PathType, second: PathType) -> bool:
    """Check whether two paths name the same entry.

    Returns False, rather than raising, when either path cannot be resolved.
    """
    try:
        return canonical(file_system, first) == canonical(file_system, second)
    except UnresolvablePathError:
        return False


class DirectoryRef:
    """A directory as seen by the walker.

    Holds the path as it was obtained from a listing together with the file system
    to query it through. The canonical path is computed on first use and cached
    once it succeeds; a failed resolution is retried on the next access.

    Equality compares canonical paths and is False whenever either side cannot be
    resolved. Instances are unhashable because their identity depends on a
    filesystem query.

    Attributes:
        path (str): The path as provided.
        file_system (FileSystem): The file system the directory lives on.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> _ = fs.add_directory("/data/raw")
        >>> DirectoryRef("/data/raw/", fs) == DirectoryRef("/data/raw", fs)
        True
        >>> DirectoryRef("/data/gone", fs) == DirectoryRef("/data/gone", fs)
        False
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, path: PathType, file_system: FileSystem) -> None:
        self.path = os.fspath(path)
        self.file_system = file_system
        self._canonical: Optional[str] = None

    @property
    def canonical(self) -> str:
        """The canonical path of the directory.

        Raises:
            UnresolvablePathError: If the directory cannot be resolved.
        """
        if self._canonical is None:
            self._canonical = canonical(self.file_system, self.path)
        return self._canonical

    @property
    def name(self) -> str:
        return self.file_system.name(self.path)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, DirectoryRef):
            return NotImplemented
        try:
            return self.canonical == other.canonical
        except UnresolvablePathError:
            return False

    def __repr__(self) -> str:
        return f"DirectoryRef({self.path!r})"


@dataclass(frozen=True)
class FileRef:
    """A file found during a walk.

    Attributes:
        name (str): The file name.
        path (str): The resolved absolute path of the file.
    """

    name: str
    path: str

    def __fspath__(self) -> str:
        return self.path
