"""Directory exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from safewalk.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Directory exclusion rules written in .gitignore syntax.

    Patterns are matched with the pathspec library the same way Git matches them:
    globs, ``**``, directory-only patterns ending in ``/``, negations starting
    with ``!`` and comment lines are all supported. Later patterns override
    earlier ones, so ``!`` can re-include a directory excluded by a broader rule.

    Only directories are ever checked, so patterns that can only match files
    (``*.pyc``) have no effect on a walk. The pattern lines are kept in the order
    they were given and compiled again only after a change.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("node_modules/")
        >>> rules.exclude("web/node_modules/")
        True
        >>> rules.add_rule("build*/")
        >>> rules.add_rule("!build-keep/")
        >>> rules.exclude("build-tmp")
        True
        >>> rules.exclude("build-keep/")
        False
        >>> rules.exclude("src/")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize the rules, optionally loading patterns from files.

        Args:
            rules_files: Path or paths of files holding .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self._spec: Optional[PathSpec] = None

        if rules_files is not None:
            self.load_rules(rules_files)

    @property
    def spec(self) -> PathSpec:
        """The compiled matcher for every pattern added so far."""
        if self._spec is None:
            self._spec = PathSpec.from_lines(GitWildMatchPattern, self._lines)
        return self._spec

    def exclude(self, path: str) -> bool:
        """Check a root-relative directory path against the patterns.

        The path is taken in directory form: backslashes become forward slashes and a
        trailing slash is added when missing, so ``"a\\b"`` and ``"a/b/"`` match alike.
        """
        directory = path.replace("\\", "/")
        if not directory.endswith("/"):
            directory += "/"
        return bool(self.spec.match_file(directory))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more files, in order.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.is_file():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._append(path.read_text(encoding="utf-8").splitlines())

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern such as ``"vendor/"`` or ``"!vendor/keep/"``."""
        self._append([rule])

    def has_rules(self) -> bool:
        # Blank and comment lines compile to patterns with include set to None
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def _append(self, lines: Sequence[str]) -> None:
        self._lines.extend(lines)
        self._spec = None
