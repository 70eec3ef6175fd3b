from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class SearchMode(str, Enum):
    """How far below the root a walk descends.

    Values:
        TOP_ONLY: Visit only the root directory itself (default)
        RECURSIVE: Visit the root and every accessible descendant in pre-order
    """

    TOP_ONLY = "top_only"
    RECURSIVE = "recursive"


class TraversalStrategy(str, Enum):
    """How a recursive walk finds the next directory to visit.

    Both strategies produce the same pre-order sequence on a tree that does not
    change during the walk.

    Values:
        STACK: Keep the subdirectories found while visiting a directory on an
            explicit stack of pending work (default)
        SIBLING: Re-derive the next directory from the parent's listing each time,
            climbing towards the root when a directory has no further sibling
    """

    STACK = "stack"
    SIBLING = "sibling"


class UpwardFaultPolicy(str, Enum):
    """What the SIBLING strategy does when a sibling lookup fails partway up the tree.

    Values:
        STOP: Abandon the upward search and end the walk (default)
        CONTINUE: Skip the faulty level and keep climbing towards the root
    """

    STOP = "stop"
    CONTINUE = "continue"
