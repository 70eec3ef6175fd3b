"""Node representation for entries of an in-memory file system."""

from typing import Any, Optional

from anytree import Node


class MemoryNode(Node):  # type: ignore
    """Node class representing a file or directory held in memory.

    Extends anytree.Node with a flag telling directories from files. Child order
    is insertion order, which is the listing order the in-memory file system
    reports.

    Attributes:
        name (str): The name of the entry (just the last path component).
        parent (Optional[MemoryNode]): The containing directory node.
        is_dir (bool): True if this node represents a directory, False for files.
        children (tuple[MemoryNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = MemoryNode("/", is_dir=True)
        >>> child = MemoryNode("notes.txt", parent=root)
        >>> child.parent is root
        True
        >>> child.is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["MemoryNode"] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
