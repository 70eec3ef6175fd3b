"""Subtree exclusion for directory walks.

A directory is excluded when it is one of the requested exclusion entries or lies
anywhere below one of them. Ancestry is established by walking the directory's
parent chain; if the chain breaks partway, ancestors above the break are treated
as unknown and cannot cause an exclusion.
"""

import os
from typing import FrozenSet, Iterable, Iterator, Optional, Union

from safewalk.access_guard import AccessGuard, Unavailable
from safewalk.exclusion_rules.base_rules import BaseExclusionRules
from safewalk.file_system.base import FileSystem
from safewalk.file_system.local import LocalFileSystem
from safewalk.path_identity import DirectoryRef
from safewalk.types import PathType


def ancestors(guard: AccessGuard, path: str) -> Iterator[str]:
    """Yield the parents of a path from the nearest upwards.

    Stops at a volume root, or as soon as a parent cannot be determined.
    """
    while True:
        parent = guard.parent(path)
        if parent is None or isinstance(parent, Unavailable):
            return
        yield parent
        path = parent


def contains(guard: AccessGuard, root: DirectoryRef, node: DirectoryRef) -> bool:
    """Check whether a directory is a strict descendant of another.

    Uses the parent chain of ``node`` rather than comparing path prefixes, so two
    spellings of the same location are handled. A broken chain or an unresolvable
    ``root`` yields False.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> _ = fs.add_directory("/a/b/c")
        >>> guard = AccessGuard(fs)
        >>> contains(guard, DirectoryRef("/a", fs), DirectoryRef("/a/b/c", fs))
        True
        >>> contains(guard, DirectoryRef("/a", fs), DirectoryRef("/a", fs))
        False
    """
    target = guard.canonical(root.path)
    if isinstance(target, Unavailable):
        return False
    return any(guard.canonical(parent) == target for parent in ancestors(guard, node.path))


class ExclusionSet:
    """An immutable set of excluded subtrees.

    Entries are compared by canonical path, so the order in which they were given
    does not matter and entries that cannot be resolved can never match (they are
    dropped when the set is built). Optionally, pattern rules prune directories by
    their position below the walk root.

    Attributes:
        guard (AccessGuard): The fault boundary used for every query.
        rules (Optional[BaseExclusionRules]): Pattern rules, checked against the
            root-relative path of each directory.
        root (Optional[DirectoryRef]): The walk root the rules are relative to.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> for path in ("/src/app", "/src/vendor/lib", "/docs"):
        ...     _ = fs.add_directory(path)
        >>> excluded = ExclusionSet(["/src/vendor"], file_system=fs)
        >>> excluded.is_excluded(DirectoryRef("/src/vendor/lib", fs))
        True
        >>> excluded.is_excluded(DirectoryRef("/src/app", fs))
        False
    """

    def __init__(
        self,
        entries: Iterable[Union[DirectoryRef, PathType]] = (),
        file_system: Optional[FileSystem] = None,
        rules: Optional[BaseExclusionRules] = None,
        root: Optional[DirectoryRef] = None,
    ) -> None:
        """Build the set.

        Args:
            entries: Directories to exclude, as DirectoryRef objects or paths.
            file_system: The file system paths refer to. Defaults to the file system
                of the walk root, then to the local file system.
            rules: Pattern rules for pruning directories. Requires ``root``.
            root: The walk root that rule paths are relative to.

        Raises:
            ValueError: If rules are given without a root.
        """
        if rules is not None and root is None:
            raise ValueError("Exclusion rules require the walk root")
        if file_system is None:
            file_system = root.file_system if root is not None else LocalFileSystem()

        self.guard = AccessGuard(file_system)
        self.rules = rules
        self.root = root

        entry_paths = [entry.path if isinstance(entry, DirectoryRef) else os.fspath(entry) for entry in entries]
        canonical_paths = (self.guard.canonical(path) for path in entry_paths)
        self._entries: FrozenSet[str] = frozenset(path for path in canonical_paths if isinstance(path, str))

    def __len__(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        """Report whether nothing can ever be excluded by this set."""
        return not self._entries and (self.rules is None or not self.rules.has_rules())

    def is_excluded(self, node: DirectoryRef) -> bool:
        """Check whether a directory lies in an excluded subtree.

        Args:
            node: The directory to check.

        Returns:
            True if ``node`` is an exclusion entry, descends from one, or is matched
            by the pattern rules.
        """
        if self.is_empty():
            return False
        if self._entries and self._matches_entry(node.path):
            return True
        if self._matches_rules(node):
            return True
        if self._entries:
            return any(self._matches_entry(parent) for parent in ancestors(self.guard, node.path))
        return False

    def _matches_entry(self, path: str) -> bool:
        canonical_path = self.guard.canonical(path)
        return isinstance(canonical_path, str) and canonical_path in self._entries

    def _matches_rules(self, node: DirectoryRef) -> bool:
        if self.rules is None or self.root is None:
            return False
        relative = self._relative_path(self.root.path, node.path)
        return relative is not None and self.rules.exclude(relative)

    def _relative_path(self, root: str, path: str) -> Optional[str]:
        """Return ``path`` relative to ``root`` as ``"a/b/"``, or None if it is not below it."""
        file_system = self.guard.file_system
        separators = file_system.separators()
        resolved_root = self.guard.resolve(root)
        resolved_path = self.guard.resolve(path)
        if not isinstance(resolved_root, str) or not isinstance(resolved_path, str):
            return None
        resolved_root = resolved_root.rstrip(separators)
        resolved_path = resolved_path.rstrip(separators)
        prefix = file_system.normcase(resolved_root + file_system.sep)
        if not file_system.normcase(resolved_path).startswith(prefix):
            return None
        relative = resolved_path[len(resolved_root) + 1 :]
        for separator in separators:
            relative = relative.replace(separator, "/")
        return relative + "/"
