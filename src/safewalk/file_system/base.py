from abc import ABC, abstractmethod
from typing import List, Optional


class FileSystem(ABC):
    """
    Abstract base class defining the read-only primitives a walk is built from.

    Every method may fail: implementations raise ``OSError`` (or ``ValueError``
    for malformed paths) exactly as the underlying storage reports it. The walker
    never calls these methods directly; all calls go through
    :class:`safewalk.access_guard.AccessGuard`, which turns failures into
    :class:`safewalk.access_guard.Unavailable` results.

    Paths are plain strings in the file system's own syntax. Listings are returned
    as fully built lists so that no directory handle outlives a single call.

    Attributes:
        sep (str): The primary path separator.
        altsep (Optional[str]): An alternative separator accepted in paths, if any.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> _ = fs.add_file("/docs/readme.txt")
        >>> fs.list_files("/docs", "*.txt")
        ['/docs/readme.txt']
        >>> fs.parent("/docs") == "/"
        True
        >>> fs.parent("/") is None
        True
    """

    sep: str = "/"
    altsep: Optional[str] = None

    @abstractmethod
    def resolve(self, path: str) -> str:
        """
        Return the absolute form of an existing entry.

        Args:
            path (str): Path to resolve.

        Returns:
            str: The absolute path of the entry.

        Raises:
            OSError: If the entry does not exist or cannot be accessed.
        """
        pass

    @abstractmethod
    def list_directories(self, path: str) -> List[str]:
        """
        List the immediate subdirectories of a directory.

        Args:
            path (str): Directory to list.

        Returns:
            List[str]: Full paths of the subdirectories, in the order the storage
                provides them.

        Raises:
            OSError: If the directory cannot be listed.
        """
        pass

    @abstractmethod
    def list_files(self, path: str, pattern: str) -> List[str]:
        """
        List the immediate files of a directory whose names match a glob pattern.

        Args:
            path (str): Directory to list.
            pattern (str): Shell-style pattern matched against file names.

        Returns:
            List[str]: Full paths of the matching files, in listing order.

        Raises:
            OSError: If the directory cannot be listed.
        """
        pass

    @abstractmethod
    def parent(self, path: str) -> Optional[str]:
        """
        Return the parent directory of a path, or None for a volume root.

        Raises:
            OSError: If the parent cannot be determined.
        """
        pass

    @abstractmethod
    def root(self, path: str) -> str:
        """
        Return the volume root a path lives on.

        Raises:
            OSError: If the volume cannot be determined.
        """
        pass

    @abstractmethod
    def volumes(self) -> List[str]:
        """
        Return the ordered list of top-level volumes.

        Raises:
            OSError: If the volumes cannot be enumerated.
        """
        pass

    def normcase(self, path: str) -> str:
        """Fold a path for comparison. Case-sensitive file systems return it unchanged."""
        return path

    def separators(self) -> str:
        """Return every character this file system accepts as a path separator."""
        return self.sep + (self.altsep or "")

    def name(self, path: str) -> str:
        """Return the last component of a path."""
        stripped = path.rstrip(self.separators())
        for separator in self.separators():
            stripped = stripped.rsplit(separator, 1)[-1]
        return stripped
