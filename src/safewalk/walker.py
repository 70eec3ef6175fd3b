"""Fault-tolerant, lazy enumeration of the files below a directory.

The walk is iterative and pulls from the file system only as the caller asks for
the next file. Every filesystem query goes through an :class:`AccessGuard`, so a
directory that cannot be listed contributes no files but never stops the walk,
and a file or directory that cannot be resolved is simply skipped.

Two strategies produce the same pre-order sequence on a tree that does not
change during the walk:

- ``TraversalStrategy.STACK`` lists each visited directory's subdirectories once
  and keeps them on an explicit stack of pending work.
- ``TraversalStrategy.SIBLING`` keeps only the current directory. After visiting
  it, the walk descends into its first accessible subdirectory, or otherwise
  climbs towards the root asking each level for its next sibling, re-listing the
  parent each time. A candidate outside the root ends the walk.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from safewalk.access_guard import AccessGuard, Unavailable
from safewalk.exclusion import ExclusionSet, contains
from safewalk.exclusion_rules.base_rules import BaseExclusionRules
from safewalk.file_system.base import FileSystem
from safewalk.file_system.local import LocalFileSystem
from safewalk.path_identity import DirectoryRef, FileRef
from safewalk.sibling import SiblingNavigator
from safewalk.types import PathType, SearchMode, TraversalStrategy, UpwardFaultPolicy


class _State(Enum):
    VISIT = "visit"
    ADVANCE = "advance"
    DONE = "done"


@dataclass
class TraversalCursor:
    """Position of a SIBLING walk. Lives only as long as the generator that owns it."""

    current: Optional[DirectoryRef]
    root: DirectoryRef
    pattern: str
    mode: SearchMode


class TreeWalker:
    """Enumerates the files below a root directory, skipping whatever cannot be accessed.

    A walker holds configuration only. Each call to :meth:`walk` starts an
    independent traversal from the root, so a walker can be iterated any number of
    times; the traversal state is discarded when the caller stops consuming or the
    sequence is exhausted, and no directory handle is held between pulls.

    Exclusions prune whole subtrees: an excluded directory contributes no files and
    is never descended into, but its siblings are still visited. In TOP_ONLY mode
    only the root is visited, and excluding the root suppresses its files.

    Symlinks to directories are followed; cycles created by links are not
    detected.

    Attributes:
        root (DirectoryRef): The directory the walk starts from.
        exclusions (ExclusionSet): Subtrees left out of the walk.
        pattern (str): Shell-style pattern that file names must match.
        mode (SearchMode): Whether to descend below the root.
        strategy (TraversalStrategy): How the next directory is found.
        upward_fault_policy (UpwardFaultPolicy): What the SIBLING strategy does when a
            sibling lookup fails while climbing towards the root.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> for path in ("/D/6.txt", "/D/DA/7.bmp", "/D/DB/9.txt"):
        ...     _ = fs.add_file(path)
        >>> walker = TreeWalker("/D", mode=SearchMode.RECURSIVE, file_system=fs)
        >>> [f.name for f in walker.walk()]
        ['6.txt', '7.bmp', '9.txt']
        >>> [f.name for f in TreeWalker("/D", ["/D/DA"], "*.txt", "recursive", file_system=fs).walk()]
        ['6.txt', '9.txt']
    """

    def __init__(
        self,
        root: Union[DirectoryRef, PathType],
        exclusions: Union[ExclusionSet, Iterable[Union[DirectoryRef, PathType]]] = (),
        pattern: str = "*",
        mode: Union[SearchMode, str] = SearchMode.TOP_ONLY,
        *,
        file_system: Optional[FileSystem] = None,
        rules: Optional[BaseExclusionRules] = None,
        strategy: Union[TraversalStrategy, str] = TraversalStrategy.STACK,
        upward_fault_policy: Union[UpwardFaultPolicy, str] = UpwardFaultPolicy.STOP,
    ) -> None:
        """Initialize a TreeWalker.

        Args:
            root: The directory to walk, as a DirectoryRef or a path.
            exclusions: Directories whose subtrees are left out, or a prepared
                ExclusionSet.
            pattern: Shell-style pattern matched against file names. Defaults to "*".
            mode: TOP_ONLY (default) visits only the root; RECURSIVE visits every
                accessible descendant in pre-order.
            file_system: The file system to query. Defaults to the root's file system
                when root is a DirectoryRef, otherwise to the local file system.
            rules: Pattern rules pruning directories by their path below the root.
                Ignored when a prepared ExclusionSet is given.
            strategy: How the next directory is found. Defaults to STACK.
            upward_fault_policy: SIBLING strategy only. Defaults to STOP.

        Raises:
            TypeError: If pattern is not a string.
            ValueError: If mode, strategy or upward_fault_policy is not a known value.
        """
        if not isinstance(pattern, str):
            raise TypeError(f"pattern must be a string, got {type(pattern).__name__}")
        self.pattern = pattern
        self.mode = SearchMode(mode)
        self.strategy = TraversalStrategy(strategy)
        self.upward_fault_policy = UpwardFaultPolicy(upward_fault_policy)

        if file_system is None:
            file_system = root.file_system if isinstance(root, DirectoryRef) else LocalFileSystem()
        self.file_system = file_system
        self.root = root if isinstance(root, DirectoryRef) else DirectoryRef(root, file_system)

        self.guard = AccessGuard(file_system)
        self.siblings = SiblingNavigator(self.guard)
        if isinstance(exclusions, ExclusionSet):
            self.exclusions = exclusions
        else:
            self.exclusions = ExclusionSet(exclusions, file_system, rules=rules, root=self.root)

    def walk(self) -> Iterator[FileRef]:
        """Start a new traversal and return its lazy sequence of files.

        Yields:
            FileRef for each matching file, in pre-order: a directory's own files in
            listing order, then the files of its subdirectories.
        """
        if self.strategy is TraversalStrategy.STACK:
            return self._walk_stack()
        return self._walk_siblings()

    def __iter__(self) -> Iterator[FileRef]:
        return self.walk()

    def _files(self, directory: DirectoryRef) -> Iterator[FileRef]:
        paths = self.guard.list_files(directory.path, self.pattern)
        if isinstance(paths, Unavailable):
            return
        for path in paths:
            resolved = self.guard.resolve(path)
            if isinstance(resolved, Unavailable):
                continue
            yield FileRef(self.file_system.name(resolved), resolved)

    def _subdirectories(self, directory: DirectoryRef) -> Iterator[DirectoryRef]:
        """Yield the subdirectories of a directory that still resolve, in listing order."""
        paths = self.guard.list_directories(directory.path)
        if isinstance(paths, Unavailable):
            return
        for path in paths:
            if not isinstance(self.guard.resolve(path), Unavailable):
                yield DirectoryRef(path, self.file_system)

    def _walk_stack(self) -> Iterator[FileRef]:
        pending = [self.root]
        while pending:
            current = pending.pop()
            excluded = self.exclusions.is_excluded(current)
            if not excluded:
                yield from self._files(current)
            if self.mode is SearchMode.TOP_ONLY:
                return
            if not excluded:
                # Reversed so the first listed subdirectory is popped first
                pending.extend(reversed(list(self._subdirectories(current))))

    def _walk_siblings(self) -> Iterator[FileRef]:
        cursor = TraversalCursor(current=self.root, root=self.root, pattern=self.pattern, mode=self.mode)
        state = _State.VISIT
        excluded = False
        while state is not _State.DONE and cursor.current is not None:
            if state is _State.VISIT:
                excluded = self.exclusions.is_excluded(cursor.current)
                if not excluded:
                    yield from self._files(cursor.current)
                state = _State.ADVANCE if cursor.mode is SearchMode.RECURSIVE else _State.DONE
            else:
                cursor.current = self._advance(cursor.root, cursor.current, excluded)
                state = _State.DONE if cursor.current is None else _State.VISIT

    def _advance(self, root: DirectoryRef, current: DirectoryRef, excluded: bool) -> Optional[DirectoryRef]:
        """Return the directory to visit after ``current``, or None to stop."""
        candidate = None
        if not excluded:
            # Pre-order: descend before moving sideways
            candidate = next(self._subdirectories(current), None)
        if candidate is None:
            candidate = self._next_after_subtree(current)
        if candidate is not None and contains(self.guard, root, candidate):
            return candidate
        return None

    def _next_after_subtree(self, directory: DirectoryRef) -> Optional[DirectoryRef]:
        """Climb from a finished directory until some level has a next sibling."""
        ancestor = directory
        while True:
            # Any sibling at or above the root lies outside it
            if ancestor == self.root:
                return None
            sibling = self.siblings.next_sibling(ancestor)
            if isinstance(sibling, Unavailable):
                if self.upward_fault_policy is UpwardFaultPolicy.STOP:
                    return None
            elif sibling is not None:
                return sibling
            parent = self.guard.parent(ancestor.path)
            if parent is None or isinstance(parent, Unavailable):
                return None
            ancestor = DirectoryRef(parent, self.file_system)


def enumerate_files(
    root: Union[DirectoryRef, PathType],
    exclusions: Union[ExclusionSet, Iterable[Union[DirectoryRef, PathType]]] = (),
    pattern: str = "*",
    mode: Union[SearchMode, str] = SearchMode.TOP_ONLY,
    *,
    file_system: Optional[FileSystem] = None,
    rules: Optional[BaseExclusionRules] = None,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.STACK,
    upward_fault_policy: Union[UpwardFaultPolicy, str] = UpwardFaultPolicy.STOP,
) -> Iterator[FileRef]:
    """Lazily enumerate the files below a directory, tolerating any filesystem fault.

    This is a shortcut for ``TreeWalker(...).walk()``; see :class:`TreeWalker` for
    the meaning of every argument. Faults are never raised: inaccessible
    directories and files are left out of the sequence, and a root that does not
    exist produces an empty sequence.

    Raises:
        TypeError: If pattern is not a string.
        ValueError: If mode, strategy or upward_fault_policy is not a known value.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem()
        >>> for path in ("/B/b1/2.txt", "/B/b2/3.txt"):
        ...     _ = fs.add_file(path)
        >>> [f.name for f in enumerate_files("/B", file_system=fs)]
        []
        >>> [f.path for f in enumerate_files("/B", mode=SearchMode.RECURSIVE, file_system=fs)]
        ['/B/b1/2.txt', '/B/b2/3.txt']
    """
    walker = TreeWalker(
        root,
        exclusions,
        pattern,
        mode,
        file_system=file_system,
        rules=rules,
        strategy=strategy,
        upward_fault_policy=upward_fault_policy,
    )
    return walker.walk()
