"""Command-line argument parsing for dirtools.

This module defines the ``dirtools`` subcommands and their options, and turns the
exclusion options into an exclusion rules object.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dirtools import __version__
from dirtools.exceptions import InvalidArgumentError
from dirtools.exclusion_rules import (
    DEFAULT_EXCLUDED_NAMES,
    BaseExclusionRules,
    CompositeExclusionRules,
    NameExclusionRules,
)

PERMISSION_CHOICES = ["ignore", "warn", "fail"]


def split_names(value: str) -> List[str]:
    """Split a comma-separated list of folder names, dropping blanks.

    Example:
        >>> split_names("node_modules, .next,,dist")
        ['node_modules', '.next', 'dist']
    """
    return [name.strip() for name in value.split(",") if name.strip()]


def create_exclusion_action(pattern_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create an action class that feeds -e/-i options into ``pattern_rules``.

    Pattern files and individual patterns are added in the order they appear on the
    command line, so a later negation can re-include something an earlier file excluded.

    Args:
        pattern_rules: The gitignore-style rules object to update during parsing.

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

            if option_string in ("-e", "--exclude-from"):
                if isinstance(values, (str, os.PathLike)):
                    pattern_rules.load_rules(values)
                else:
                    pattern_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                pattern_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def _add_walk_options(parser: argparse.ArgumentParser, exclusion_action: Type[argparse.Action]) -> None:
    parser.add_argument("root", type=Path, help="Directory to walk.")
    parser.add_argument(
        "-x",
        "--exclude",
        type=split_names,
        action="append",
        metavar="NAMES",
        help=(
            "Comma-separated folder or file names to skip at any depth (can be specified multiple "
            f"times). Replaces the default set: {', '.join(sorted(DEFAULT_EXCLUDED_NAMES))}."
        ),
    )
    parser.add_argument(
        "-X",
        "--no-default-excludes",
        action="store_true",
        help="Do not skip the default folder names.",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=exclusion_action,
        help="Gitignore-style pattern to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=exclusion_action,
        help="File of gitignore-style patterns, e.g. .gitignore (can be specified multiple times).",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Follow symbolic links. By default links are listed but never descended.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=PERMISSION_CHOICES,
        default="warn",
        help="How to handle unreadable directories (default: warn).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Write the listing to FILE instead of stdout.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print directory, file and size totals to stderr.",
    )


def create_parser(pattern_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        pattern_rules: The gitignore-style rules object updated by -e/-i during parsing.

    Returns:
        An ArgumentParser instance configured with the dirtools subcommands.
    """
    description = """
    dirtools: directory walking, size reporting and small filesystem helpers.

    All relative paths are resolved against the directory dirtools was started from.
    """

    epilog = """
    Examples:
      # List everything below a project, skipping node_modules, .next and .pnpm-store
      dirtools walk ~/project

      # Skip other folders instead, and anything matched by .gitignore
      dirtools walk --exclude dist,build -e .gitignore ~/project

      # Total size in bytes, or in human-readable form
      dirtools size ~/project
      dirtools size --human ~/project

      # Tree view with a summary
      dirtools tree -s ~/project

      # File helpers
      dirtools cp notes.txt backup/
      dirtools mv old/ archive/
      dirtools rename draft.md final.md
      dirtools rm build
      dirtools ln /opt/tool/bin/tool tool
      dirtools touch test py -n 3
    """

    parser = argparse.ArgumentParser(
        prog="dirtools",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"dirtools {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(pattern_rules)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    walk_parser = subparsers.add_parser("walk", help="List every entry below a directory.")
    _add_walk_options(walk_parser, ExclusionAction)

    tree_parser = subparsers.add_parser("tree", help="Show a directory as a tree.")
    _add_walk_options(tree_parser, ExclusionAction)

    size_parser = subparsers.add_parser("size", help="Print the total size of a directory.")
    size_parser.add_argument("root", type=Path, help="Directory to measure.")
    size_parser.add_argument(
        "-H", "--human", action="store_true", help="Print the size as '<value> <unit>' (KB, MB or GB)."
    )

    cp_parser = subparsers.add_parser("cp", help="Copy a file or directory.")
    cp_parser.add_argument("source", type=Path)
    cp_parser.add_argument("destination", type=Path)
    cp_parser.add_argument("-f", "--force", action="store_true", help="Replace an existing destination.")

    mv_parser = subparsers.add_parser("mv", help="Move a file or directory.")
    mv_parser.add_argument("source", type=Path)
    mv_parser.add_argument("destination", type=Path)
    mv_parser.add_argument("-f", "--force", action="store_true", help="Replace an existing destination.")

    rename_parser = subparsers.add_parser("rename", help="Rename a file or directory in place.")
    rename_parser.add_argument("path", type=Path)
    rename_parser.add_argument("new_name", help="New name, without any directory part.")

    rm_parser = subparsers.add_parser("rm", help="Remove a file or directory tree, recursively and without prompting.")
    rm_parser.add_argument("path", type=Path)

    ln_parser = subparsers.add_parser("ln", help="Create a symbolic link.")
    ln_parser.add_argument("target", type=Path, help="Existing path the link points to.")
    ln_parser.add_argument("link", type=Path, help="Path of the link to create.")

    touch_parser = subparsers.add_parser("touch", help="Create one or more empty files.")
    touch_parser.add_argument("name", help="Base file name.")
    touch_parser.add_argument("extension", help="File extension, with or without the dot.")
    touch_parser.add_argument("-n", "--count", default="1", help="Number of files to create (default: 1).")
    touch_parser.add_argument("-d", "--directory", type=Path, help="Directory to create them in.")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse checks.

    Converts ``--count`` to an int in place.

    Raises:
        InvalidArgumentError: If any arguments fail validation.
    """
    if args.command == "touch":
        try:
            args.count = int(args.count)
        except (TypeError, ValueError):
            raise InvalidArgumentError(f"Count must be a positive integer, got {args.count!r}")
        if args.count < 1:
            raise InvalidArgumentError(f"Count must be a positive integer, got {args.count}")

    if args.command in ("walk", "tree") and args.exclude and args.no_default_excludes:
        raise InvalidArgumentError("--exclude already replaces the default names; drop --no-default-excludes")


def build_exclusion_rules(args: argparse.Namespace, pattern_rules: BaseExclusionRules) -> BaseExclusionRules:
    """Combine the folder-name options and the collected patterns into one rules object."""
    if args.exclude:
        names = NameExclusionRules(name for group in args.exclude for name in group)
    elif args.no_default_excludes:
        names = NameExclusionRules()
    else:
        names = NameExclusionRules(DEFAULT_EXCLUDED_NAMES)

    if pattern_rules.has_rules():
        return CompositeExclusionRules([names, pattern_rules])
    return names
