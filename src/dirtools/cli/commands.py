"""Implementations of the dirtools subcommands.

Each command receives the parsed arguments and the working directory captured by
``main``, writes its output, and returns the process exit code.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, TextIO, Union

from dirtools.cli.safe_writer import SafeWriter
from dirtools.exclusion_rules.base_rules import BaseExclusionRules
from dirtools.operations import copy_path, create_files, create_symlink, move_path, remove_path, rename_path
from dirtools.result import OperationResult
from dirtools.sizes import format_size, total_size
from dirtools.walker import DirectoryWalker, FileEntry, FileTree, PermissionAction

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PERMISSION_DENIED = 126

PERMISSION_ACTIONS = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.REPORT,
    "fail": PermissionAction.RAISE,
}

Command = Callable[[argparse.Namespace, Path, BaseExclusionRules], int]


def exit_code_for(error: Optional[BaseException]) -> int:
    """Exit code for a failed command: 126 for permission problems, 1 otherwise."""
    if isinstance(error, PermissionError):
        return EXIT_PERMISSION_DENIED
    return EXIT_ERROR


def report_failure(result: OperationResult) -> int:  # type: ignore[type-arg]
    """Print a failed result's error to stderr and return the matching exit code."""
    print(f"Error: {result.error}", file=sys.stderr)
    return exit_code_for(result.error)


def format_summary(directories: int, files: int, symlinks: int, size_in_bytes: int) -> str:
    """Format walk totals into a human-readable block.

    Example:
        >>> print(format_summary(2, 5, 1, 2048))
        Directories: 2
        Files: 5
        Symlinks: 1
        Size: 2.00 KB
    """
    value, unit = format_size(size_in_bytes)
    return "\n".join(
        [
            f"Directories: {directories}",
            f"Files: {files}",
            f"Symlinks: {symlinks}",
            f"Size: {value} {unit}",
        ]
    )


def _make_walker(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> DirectoryWalker:
    return DirectoryWalker(
        args.root,
        exclude=rules,
        permission_action=PERMISSION_ACTIONS[args.permission_action],
        follow_symlinks=args.follow_symlinks,
        cwd=cwd,
    )


def _output_target(args: argparse.Namespace, cwd: Path) -> Union[TextIO, Path]:
    if args.output is None:
        return sys.stdout
    return args.output if args.output.is_absolute() else cwd / args.output


def run_walk(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    """Print ``<path>\\t<is_directory>`` for every entry below the root."""
    walker = _make_walker(args, cwd, rules)
    items = iter(walker)

    directories = files = symlinks = size = 0
    with SafeWriter(_output_target(args, cwd)) as writer:
        try:
            for item in items:
                if not isinstance(item, FileEntry):
                    print(f"Warning: {item}", file=sys.stderr)
                    continue
                writer.write_line(f"{item.path}\t{item.is_directory}")
                if item.is_symlink:
                    symlinks += 1
                if item.is_directory:
                    directories += 1
                elif not item.is_symlink or args.follow_symlinks:
                    files += 1
                    size += item.size_in_bytes
        except BrokenPipeError:
            return EXIT_OK

    if args.summary:
        print(format_summary(directories, files, symlinks, size), file=sys.stderr)
    return EXIT_OK


def run_tree(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    """Print the walked structure as a tree."""
    tree = FileTree(_make_walker(args, cwd, rules))
    tree.get_tree()

    for error in tree.errors:
        print(f"Warning: {error}", file=sys.stderr)

    with SafeWriter(_output_target(args, cwd)) as writer:
        try:
            for line in tree.stream_tree_representation():
                writer.write_line(line)
        except BrokenPipeError:
            return EXIT_OK

    if args.summary:
        summary = format_summary(tree.directory_count, tree.file_count, tree.symlink_count, tree.total_size)
        print(summary, file=sys.stderr)
    return EXIT_OK


def run_size(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    """Print the total size of the root, in bytes or as ``<value> <unit>``."""
    result = total_size(args.root, cwd=cwd)
    if not result.ok:
        return report_failure(result)

    size = result.unwrap()
    if args.human:
        value, unit = format_size(size)
        print(f"{value} {unit}")
    else:
        print(size)
    return EXIT_OK


def _finish(result: OperationResult, message: Optional[str] = None) -> int:  # type: ignore[type-arg]
    if not result.ok:
        return report_failure(result)
    if message:
        print(message)
    return EXIT_OK


def run_copy(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = copy_path(args.source, args.destination, cwd=cwd, overwrite=args.force)
    return _finish(result, f"Copied to {result.value}" if result.ok else None)


def run_move(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = move_path(args.source, args.destination, cwd=cwd, overwrite=args.force)
    return _finish(result, f"Moved to {result.value}" if result.ok else None)


def run_rename(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = rename_path(args.path, args.new_name, cwd=cwd)
    return _finish(result, f"Renamed to {result.value}" if result.ok else None)


def run_remove(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = remove_path(args.path, cwd=cwd)
    return _finish(result, f"Removed {result.value}" if result.ok else None)


def run_link(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = create_symlink(args.target, args.link, cwd=cwd)
    return _finish(result, f"Linked {result.value} → {args.target}" if result.ok else None)


def run_touch(args: argparse.Namespace, cwd: Path, rules: BaseExclusionRules) -> int:
    result = create_files(args.name, args.extension, args.count, directory=args.directory, cwd=cwd)
    if not result.ok:
        return report_failure(result)
    for path in result.unwrap():
        print(f"Created {path}")
    return EXIT_OK


COMMANDS: Dict[str, Command] = {
    "walk": run_walk,
    "tree": run_tree,
    "size": run_size,
    "cp": run_copy,
    "mv": run_move,
    "rename": run_rename,
    "rm": run_remove,
    "ln": run_link,
    "touch": run_touch,
}
