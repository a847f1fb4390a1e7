"""Command-line interface for dirtools.

This module provides the ``dirtools`` entry point. It parses the command line, captures
the working directory once, runs the selected subcommand and maps failures and signals to
exit codes.

Signal Handling Notes:
    - SIGPIPE: Handled when output pipe is closed (e.g., when piping to `head`) on Unix-like systems
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Operation failed (missing path, existing destination, invalid argument, ...)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List a project without node_modules, .next and .pnpm-store
    $ dirtools walk ~/project

    # Human-readable total size
    $ dirtools size --human ~/project
"""

import sys
from pathlib import Path
from typing import Optional, Sequence

from dirtools.cli.argparser import build_exclusion_rules, create_parser, validate_args
from dirtools.cli.commands import COMMANDS, EXIT_OK, exit_code_for
from dirtools.cli.signal_handler import setup_signal_handling, signal_handler
from dirtools.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dirtools.exclusion_rules.name_rules import NameExclusionRules


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the dirtools command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.
    """
    setup_signal_handling()

    exit_code = EXIT_OK
    try:
        # Filled in by -e/-i while the command line is parsed
        pattern_rules = GitIgnoreExclusionRules()

        parser = create_parser(pattern_rules)
        # argparse exits with 2 on syntax errors and 0 for --version
        args = parser.parse_args(argv)

        validate_args(args)

        cwd = Path.cwd()
        if args.command in ("walk", "tree"):
            rules = build_exclusion_rules(args, pattern_rules)
        else:
            rules = NameExclusionRules()

        exit_code = COMMANDS[args.command](args, cwd, rules)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(exit_code_for(e))

    signal_code = signal_handler.exit_code()
    if signal_code is not None:
        sys.exit(signal_code)
    if exit_code != EXIT_OK:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
