"""Fault boundary around the filesystem primitives.

Every query the walker makes goes through :class:`AccessGuard`. A query either
returns its value or an :class:`Unavailable` marker describing what failed; no
filesystem error travels past this module. The walker composes these results
explicitly instead of relying on exception handlers scattered through the
traversal.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, TypeVar, Union

from safewalk.exceptions import UnresolvablePathError
from safewalk.file_system.base import FileSystem
from safewalk.path_identity import canonical

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Failures a filesystem primitive may report. Anything else is a bug and propagates.
GUARDED_ERRORS = (OSError, ValueError, UnresolvablePathError)


@dataclass(frozen=True)
class Unavailable:
    """Marker returned in place of a value when a filesystem query failed.

    Attributes:
        operation (str): Name of the primitive that failed.
        path (Optional[str]): The path being queried, if the primitive takes one.
        error (BaseException): The error the file system reported.
    """

    operation: str
    path: Optional[str]
    error: BaseException


Fallible = Union[T, Unavailable]


def is_unavailable(value: Any) -> bool:
    """Check whether a guarded query failed.

    Example:
        >>> is_unavailable(Unavailable("resolve", "/x", PermissionError()))
        True
        >>> is_unavailable([])
        False
    """
    return isinstance(value, Unavailable)


class AccessGuard:
    """Wraps a :class:`FileSystem` so that every primitive returns a fallible result.

    Attributes:
        file_system (FileSystem): The wrapped file system.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> _ = fs.add_file("/logs/app.log")
        >>> guard = AccessGuard(fs)
        >>> guard.list_files("/logs", "*.log")
        ['/logs/app.log']
        >>> fs.fail("/logs", "list_files")
        >>> is_unavailable(guard.list_files("/logs", "*.log"))
        True
    """

    def __init__(self, file_system: FileSystem) -> None:
        self.file_system = file_system

    def _call(self, operation: str, path: Optional[str], query: Callable[[], T]) -> Fallible[T]:
        try:
            return query()
        except GUARDED_ERRORS as e:
            logger.debug("%s unavailable for %r: %s", operation, path, e)
            return Unavailable(operation, path, e)

    def resolve(self, path: str) -> Fallible[str]:
        """Return the absolute path of an entry, the guarded equivalent of "full name or nothing"."""
        return self._call("resolve", path, lambda: self.file_system.resolve(path))

    def canonical(self, path: str) -> Fallible[str]:
        return self._call("canonical", path, lambda: canonical(self.file_system, path))

    def list_files(self, path: str, pattern: str) -> Fallible[List[str]]:
        return self._call("list_files", path, lambda: self.file_system.list_files(path, pattern))

    def list_directories(self, path: str) -> Fallible[List[str]]:
        return self._call("list_directories", path, lambda: self.file_system.list_directories(path))

    def parent(self, path: str) -> Fallible[Optional[str]]:
        return self._call("parent", path, lambda: self.file_system.parent(path))

    def root(self, path: str) -> Fallible[str]:
        return self._call("root", path, lambda: self.file_system.root(path))

    def volumes(self) -> Fallible[List[str]]:
        return self._call("volumes", None, self.file_system.volumes)

    def is_root(self, path: str) -> bool:
        """Check whether a path is a volume root, i.e. has no parent.

        A path whose parent cannot be determined is not reported as a root.
        """
        return self.parent(path) is None
