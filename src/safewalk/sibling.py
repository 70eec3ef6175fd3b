"""Locating the next directory at the same level of the tree."""

from typing import List, Optional

from safewalk.access_guard import AccessGuard, Fallible, Unavailable
from safewalk.path_identity import DirectoryRef


class SiblingNavigator:
    """Finds the directory that follows another one among its parent's subdirectories.

    The parent is listed afresh on every call and the directory is located in that
    listing by canonical path; the first later entry that still resolves is its
    sibling. A directory without a parent is a volume root, and its sibling is the
    next volume in the order the file system reports them.

    A result of ``None`` means there is no next sibling. An :class:`Unavailable`
    result means the sibling could not be determined because the parent listing,
    the directory itself or the volume list was inaccessible; callers that only
    need to know whether to continue can treat it exactly like ``None``.

    Attributes:
        guard (AccessGuard): The fault boundary used for every query.

    Example:
        >>> from safewalk.file_system.memory import MemoryFileSystem
        >>> fs = MemoryFileSystem(volumes=("A:/", "B:/"))
        >>> for path in ("A:/one", "A:/two", "A:/three"):
        ...     _ = fs.add_directory(path)
        >>> navigator = SiblingNavigator(AccessGuard(fs))
        >>> navigator.next_sibling(DirectoryRef("A:/one", fs))
        DirectoryRef('A:/two')
        >>> navigator.next_sibling(DirectoryRef("A:/three", fs)) is None
        True
        >>> navigator.next_sibling(DirectoryRef("A:/", fs))
        DirectoryRef('B:/')
    """

    def __init__(self, guard: AccessGuard) -> None:
        self.guard = guard

    def next_sibling(self, directory: DirectoryRef) -> Fallible[Optional[DirectoryRef]]:
        """Return the next directory at the same level, None, or Unavailable."""
        parent = self.guard.parent(directory.path)
        if isinstance(parent, Unavailable):
            return parent
        if parent is None:
            return self.next_volume(directory)

        siblings = self.guard.list_directories(parent)
        if isinstance(siblings, Unavailable):
            return siblings
        target = self.guard.canonical(directory.path)
        if isinstance(target, Unavailable):
            return target

        position = next((i for i, path in enumerate(siblings) if self.guard.canonical(path) == target), None)
        if position is None:
            # Vanished from the listing since it was visited
            return None
        for path in siblings[position + 1 :]:
            if not isinstance(self.guard.resolve(path), Unavailable):
                return DirectoryRef(path, self.guard.file_system)
        return None

    def volume_of(self, directory: DirectoryRef) -> Fallible[Optional[str]]:
        """Return the entry of the volume list that a directory lives on, or None if it is not listed."""
        volumes = self.guard.volumes()
        if isinstance(volumes, Unavailable):
            return volumes
        position = self._volume_position(volumes, directory)
        if isinstance(position, Unavailable) or position is None:
            return position
        return volumes[position]

    def next_volume(self, directory: DirectoryRef) -> Fallible[Optional[DirectoryRef]]:
        """Return the volume listed after the one a directory lives on.

        Volume names are compared without regard to case. The last volume, or a
        volume missing from the list, has no next volume.
        """
        volumes = self.guard.volumes()
        if isinstance(volumes, Unavailable):
            return volumes
        position = self._volume_position(volumes, directory)
        if isinstance(position, Unavailable) or position is None:
            return position
        if position + 1 >= len(volumes):
            return None
        return DirectoryRef(volumes[position + 1], self.guard.file_system)

    def _volume_position(self, volumes: List[str], directory: DirectoryRef) -> Fallible[Optional[int]]:
        root = self.guard.root(directory.path)
        if isinstance(root, Unavailable):
            return root
        folded = root.casefold()
        return next((i for i, volume in enumerate(volumes) if volume.casefold() == folded), None)
