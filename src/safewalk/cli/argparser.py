"""Command-line argument parsing for safewalk.

This module defines the command-line interface for safewalk,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from safewalk import __version__
from safewalk.exclusion_rules.base_rules import BaseExclusionRules
from safewalk.types import TraversalStrategy


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create an action class that feeds -e/-i options into an exclusion rules object.

    Rules are added as the options are parsed, so the order of patterns and rule
    files on the command line is preserved; that order matters for negations.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            if getattr(namespace, self.dest, None) is None:
                setattr(namespace, self.dest, [])
            getattr(namespace, self.dest).append(values)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with safewalk's options.
    """
    description = """
    safewalk: list the files below a directory, skipping anything that cannot be accessed.

    Directories that cannot be listed, entries that vanish during the walk and
    broken links are skipped silently; the walk itself never fails because of them.
    Whole subtrees can be left out by naming them (-x) or with gitignore-style
    directory patterns (-i, -e).
    """

    epilog = """
    Examples:
      # Files directly inside a directory
      safewalk /path/to/dir

      # Every text file below a directory
      safewalk -r -p "*.txt" /path/to/dir

      # Leave out two subtrees
      safewalk -r -x /path/to/dir/build -x /path/to/dir/.git /path/to/dir

      # Prune directories by pattern, from a file or directly
      safewalk -r -e .gitignore -i "node_modules/" /path/to/dir

      # Mark files that another process holds locked
      safewalk -r -l /path/to/dir

      # Report skipped entries while walking
      safewalk -r -v /path/to/dir
    """

    parser = argparse.ArgumentParser(
        prog="safewalk",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"safewalk {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument("directory", type=Path, help="The directory to walk.")
    parser.add_argument(
        "-p",
        "--pattern",
        default="*",
        help='Shell-style pattern that file names must match (default: "*").',
    )
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Descend into subdirectories. By default only the directory itself is listed.",
    )
    parser.add_argument(
        "-x",
        "--exclude-dir",
        type=Path,
        metavar="DIR",
        action="append",
        help="Directory whose whole subtree is left out (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="File of gitignore-style patterns; matching directories are pruned (can be repeated).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern for directories to prune, such as 'build/' or '!build/keep/'. "
            "Can be repeated; patterns apply in the order given, mixed with -e/--exclude."
        ),
    )
    parser.add_argument(
        "-S",
        "--strategy",
        choices=[strategy.value for strategy in TraversalStrategy],
        default=TraversalStrategy.STACK.value,
        help="How the next directory is found (default: stack).",
    )
    parser.add_argument(
        "--continue-on-fault",
        action="store_true",
        help="With --strategy sibling, keep climbing when a sibling lookup fails instead of stopping.",
    )
    parser.add_argument(
        "-l",
        "--locked",
        action="store_true",
        help="Append ' [locked]' to files that another process holds locked.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print the number of files found. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every skipped entry to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.continue_on_fault and args.strategy != TraversalStrategy.SIBLING.value:
        raise ValueError("--continue-on-fault requires --strategy sibling")
    if not args.directory.is_dir():
        raise ValueError(f"Not a directory: {args.directory}")
