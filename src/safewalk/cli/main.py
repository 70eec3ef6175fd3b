"""Command-line interface for safewalk.

Prints the path of every file found, one per line.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Every Python file below the current directory, skipping virtualenvs
    $ safewalk -r -p "*.py" -i ".venv/" .
"""

import logging
import sys

from safewalk.cli.argparser import create_parser, validate_args
from safewalk.cli.listing_writer import ListingWriter
from safewalk.cli.signal_handler import setup_signal_handling, signal_handler
from safewalk.exclusion_rules.git_rules import GitIgnoreExclusionRules
from safewalk.lock_probe import is_locked
from safewalk.types import SearchMode, UpwardFaultPolicy
from safewalk.walker import enumerate_files


def format_summary(file_count: int) -> str:
    """Format the summary report."""
    return f"Files: {file_count}"


def main() -> None:
    """Main entry point for the safewalk command-line interface."""
    setup_signal_handling()

    try:
        exclusion_rules = GitIgnoreExclusionRules()
        parser = create_parser(exclusion_rules)
        args = parser.parse_args()
        validate_args(args)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

        files = enumerate_files(
            args.directory,
            args.exclude_dir or (),
            args.pattern,
            SearchMode.RECURSIVE if args.recursive else SearchMode.TOP_ONLY,
            rules=exclusion_rules if exclusion_rules.has_rules() else None,
            strategy=args.strategy,
            upward_fault_policy=UpwardFaultPolicy.CONTINUE if args.continue_on_fault else UpwardFaultPolicy.STOP,
        )

        output = args.output if args.output else sys.stdout.fileno()

        with ListingWriter(output) as writer:
            try:
                for file in files:
                    writer.write_entry(file.path, locked=args.locked and is_locked(file.path))

                if args.summary in ("stdout", "file"):
                    writer.write(format_summary(writer.count) + "\n")
                elif args.summary == "stderr":
                    print(format_summary(writer.count), file=sys.stderr)

            except BrokenPipeError:
                pass  # Stop listing; the writer is closed on leaving the block

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
