from abc import ABC, abstractmethod
from typing import Sequence, Union

from safewalk.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class for rules that prune directories from a walk by pattern.

    Explicit exclusions name concrete directories. Rules complement them by
    describing directories through their position below the walk root, for example
    every ``node_modules`` directory at any depth. A directory matched by the rules
    is skipped together with its whole subtree.

    Implementations receive the directory's path relative to the walk root, using
    forward slashes and ending with a slash (``"src/vendor/"``). The root itself is
    never checked against rules.

    Example:
        >>> class NameRules(BaseExclusionRules):
        ...     def __init__(self, name: str) -> None:
        ...         self.name = name
        ...     def exclude(self, path: str) -> bool:
        ...         return path.rstrip("/").split("/")[-1] == self.name
        >>> rules = NameRules("build")
        >>> rules.exclude("src/build/")
        True
        >>> rules.exclude("src/")
        False
        >>> rules.add_rule("dist")
        Traceback (most recent call last):
        ...
        NotImplementedError: NameRules doesn't support adding individual rules.
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine whether a directory should be pruned.

        Args:
            path (str): The directory path relative to the walk root, with forward
                slashes and a trailing slash.

        Returns:
            bool: True if the directory and its subtree should be skipped.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load rules from one or more files.

        Rule types that cannot be loaded from files keep this default, which raises.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single rule.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """Report whether any rule is configured. Rule types that cannot tell assume they have rules."""
        return True
