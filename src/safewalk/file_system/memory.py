"""In-memory file system with fault injection.

The tree is held as anytree nodes, so listings come back in insertion order and
any primitive can be made to fail for a given path. This makes it possible to
exercise a walk against permission errors, vanished entries and unreadable
volumes without touching the real disk.
"""

import errno
import fnmatch
from typing import Dict, Iterable, List, Optional, Set, Tuple

from anytree import PreOrderIter, RenderTree

from .base import FileSystem
from .memory_node import MemoryNode

OPERATIONS = ("resolve", "list_directories", "list_files", "parent", "root")


class MemoryFileSystem(FileSystem):
    """A file system that lives entirely in memory.

    Volumes are given in the order ``volumes()`` reports them; each volume name
    must end with the separator (``"/"`` or ``"A:/"`` for example). Entries are
    created with :meth:`add_directory` and :meth:`add_file`, which create missing
    parent directories along the way.

    Faults are injected per path with :meth:`fail`. A failing path raises
    ``PermissionError`` from the selected primitives; :meth:`remove` detaches an
    entry so that later lookups raise ``FileNotFoundError``, which mimics an entry
    deleted while a walk is in progress.

    Attributes:
        case_sensitive (bool): Whether names differing only in case are distinct.

    Example:
        >>> fs = MemoryFileSystem(volumes=("A:/", "B:/"), case_sensitive=False)
        >>> _ = fs.add_file("A:/Data/report.TXT")
        >>> fs.list_files("a:/data", "*.txt")
        ['A:/Data/report.TXT']
        >>> fs.volumes()
        ['A:/', 'B:/']
        >>> fs.fail("A:/Data", "list_files")
        >>> fs.list_files("A:/Data", "*")
        Traceback (most recent call last):
        ...
        PermissionError: [Errno 13] Simulated list_files fault: 'A:/Data'
    """

    def __init__(self, volumes: Iterable[str] = ("/",), case_sensitive: bool = True) -> None:
        self.case_sensitive = case_sensitive
        self._volumes: List[MemoryNode] = []
        for volume in volumes:
            if not volume.endswith(self.sep):
                raise ValueError(f"Volume name must end with '{self.sep}': {volume}")
            self._volumes.append(MemoryNode(volume, is_dir=True))
        if not self._volumes:
            raise ValueError("At least one volume must be provided")
        self._faults: Dict[str, Set[str]] = {}
        self._volumes_fail = False

    # Building the tree

    def add_directory(self, path: str) -> str:
        """Create a directory and any missing parents, returning its full path."""
        return self._full_path(self._ensure(path, is_dir=True))

    def add_file(self, path: str) -> str:
        """Create a file and any missing parent directories, returning its full path."""
        return self._full_path(self._ensure(path, is_dir=False))

    def remove(self, path: str) -> None:
        """Detach an entry and its subtree from the tree."""
        node = self._find(path)
        if node.parent is None:
            raise PermissionError(errno.EPERM, "Cannot remove a volume", path)
        node.parent = None

    def fail(self, path: str, *operations: str) -> None:
        """Make primitives fail for a path.

        Args:
            path: The path whose queries should fail.
            *operations: Names of the primitives to break (see ``OPERATIONS``).
                With no names given, every primitive fails for the path.

        Raises:
            ValueError: If an unknown operation name is given.
        """
        unknown = set(operations) - set(OPERATIONS)
        if unknown:
            raise ValueError(f"Unknown operations: {', '.join(sorted(unknown))}")
        self._faults.setdefault(self._key(path), set()).update(operations or OPERATIONS)

    def fail_volumes(self) -> None:
        """Make volume enumeration fail."""
        self._volumes_fail = True

    def render(self) -> str:
        """Render every volume as a tree, directories marked with a trailing separator."""
        lines = []
        for volume in self._volumes:
            for prefix, _, node in RenderTree(volume):
                suffix = self.sep if node.is_dir and node.parent is not None else ""
                lines.append(f"{prefix}{node.name}{suffix}")
        return "\n".join(lines)

    def walk_all(self) -> List[str]:
        """Return the full path of every entry in pre-order, ignoring injected faults."""
        return [self._full_path(node) for volume in self._volumes for node in PreOrderIter(volume)]

    # FileSystem primitives

    def resolve(self, path: str) -> str:
        self._check(path, "resolve")
        return self._full_path(self._find(path))

    def list_directories(self, path: str) -> List[str]:
        self._check(path, "list_directories")
        node = self._find_directory(path)
        return [self._full_path(child) for child in node.children if child.is_dir]

    def list_files(self, path: str, pattern: str) -> List[str]:
        self._check(path, "list_files")
        node = self._find_directory(path)
        return [
            self._full_path(child)
            for child in node.children
            if not child.is_dir and fnmatch.fnmatchcase(self._fold(child.name), self._fold(pattern))
        ]

    def parent(self, path: str) -> Optional[str]:
        self._check(path, "parent")
        volume, parts = self._split(path)
        if not parts:
            return None
        return volume.name + self.sep.join(parts[:-1])

    def root(self, path: str) -> str:
        self._check(path, "root")
        volume, _ = self._split(path)
        return str(volume.name)

    def volumes(self) -> List[str]:
        if self._volumes_fail:
            raise PermissionError(errno.EACCES, "Simulated volumes fault")
        return [str(volume.name) for volume in self._volumes]

    def normcase(self, path: str) -> str:
        return self._fold(path)

    # Helpers

    def _fold(self, text: str) -> str:
        return text if self.case_sensitive else text.lower()

    def _split(self, path: str) -> Tuple[MemoryNode, List[str]]:
        folded = self._fold(path)
        for volume in self._volumes:
            name = self._fold(volume.name)
            bare = name.rstrip(self.sep)
            if (bare and folded == bare) or folded.startswith(name):
                rest = path[len(name) :]
                return volume, [part for part in rest.split(self.sep) if part]
        raise FileNotFoundError(errno.ENOENT, "No such volume", path)

    def _key(self, path: str) -> str:
        volume, parts = self._split(path)
        return self._fold(volume.name + self.sep.join(parts))

    def _check(self, path: str, operation: str) -> None:
        if operation in self._faults.get(self._key(path), ()):
            raise PermissionError(errno.EACCES, f"Simulated {operation} fault", path)

    def _child(self, node: MemoryNode, name: str) -> Optional[MemoryNode]:
        folded = self._fold(name)
        return next((child for child in node.children if self._fold(child.name) == folded), None)

    def _find(self, path: str) -> MemoryNode:
        node, parts = self._split(path)
        for part in parts:
            child = self._child(node, part) if node.is_dir else None
            if child is None:
                raise FileNotFoundError(errno.ENOENT, "No such file or directory", path)
            node = child
        return node

    def _find_directory(self, path: str) -> MemoryNode:
        node = self._find(path)
        if not node.is_dir:
            raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
        return node

    def _ensure(self, path: str, is_dir: bool) -> MemoryNode:
        node, parts = self._split(path)
        if not parts:
            return node
        for part in parts[:-1]:
            child = self._child(node, part)
            if child is None:
                child = MemoryNode(part, parent=node, is_dir=True)
            elif not child.is_dir:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", path)
            node = child
        existing = self._child(node, parts[-1])
        if existing is not None:
            if existing.is_dir != is_dir:
                raise FileExistsError(errno.EEXIST, "Entry exists with a different type", path)
            return existing
        return MemoryNode(parts[-1], parent=node, is_dir=is_dir)

    def _full_path(self, node: MemoryNode) -> str:
        volume, *rest = node.path
        return str(volume.name) + self.sep.join(str(part.name) for part in rest)
