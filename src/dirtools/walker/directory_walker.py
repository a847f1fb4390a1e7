"""Depth-first directory walker with exclusion rules.

This module provides the DirectoryWalker class and the ``walk`` convenience function.
The walk is lazy: entries are produced as the consumer pulls them, and a consumer that
stops early leaves the rest of the tree unvisited.
"""

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union

from dirtools.exceptions import PermissionDeniedError, error_from_os
from dirtools.exclusion_rules.base_rules import BaseExclusionRules
from dirtools.exclusion_rules.name_rules import DEFAULT_EXCLUDED_NAMES, NameExclusionRules
from dirtools.paths import require_directory, resolve_path
from dirtools.types import PathType
from dirtools.walker.file_entry import FileEntry, WalkError, WalkItem
from dirtools.walker.file_identifier import FileIdentifier
from dirtools.walker.permission_action import PermissionAction

ExclusionSpec = Union[None, BaseExclusionRules, Iterable[str]]

# A pending child: the scandir entry plus its root-relative path
_Pending = Tuple[os.DirEntry, str]  # type: ignore[type-arg]


def build_exclusion_rules(exclude: ExclusionSpec) -> BaseExclusionRules:
    """Turn the ``exclude`` argument of a walk into an exclusion rules object.

    None selects the default folder names, a rules object is used as-is, and any other
    iterable is treated as a set of names. A bare string is rejected because iterating it
    would exclude single characters.

    Example:
        >>> sorted(build_exclusion_rules(None).names)
        ['.next', '.pnpm-store', 'node_modules']
        >>> build_exclusion_rules(set()).has_rules()
        False
    """
    if exclude is None:
        return NameExclusionRules(DEFAULT_EXCLUDED_NAMES)
    if isinstance(exclude, BaseExclusionRules):
        return exclude
    if isinstance(exclude, str):
        raise TypeError("exclude must be a collection of names, not a single string")
    return NameExclusionRules(exclude)


class DirectoryWalker:
    """Walks a directory tree depth-first, skipping excluded entries.

    Children of a directory are visited in the order the filesystem enumerates them (no
    sorting). Every child that is not excluded is yielded before its own children. An
    excluded directory is pruned: nothing beneath it is visited. The root itself is never
    yielded and never excluded.

    Pending work is kept on an explicit stack instead of the call stack, so the depth of
    the tree is limited only by memory.

    Symbolic Link Behavior:
        By default, symlinks are yielded as non-directory entries with ``is_symlink`` set
        and a size of 0; they are never descended. With ``follow_symlinks=True`` the link
        targets are stat'ed, links to directories are descended, and each physical
        directory is descended at most once, which also breaks symlink loops.

    Permission Handling:
        When a subdirectory cannot be listed, ``permission_action`` decides what happens:
        - REPORT (default): yield a WalkError and continue with the next sibling
        - IGNORE: skip the subtree silently
        - RAISE: raise PermissionDeniedError
        An unreadable root always raises PermissionDeniedError.

    A failure to stat an individual file does not stop the walk; the file is yielded with
    a size of 0.

    Attributes:
        root_path (Path): Absolute path of the directory being walked.
        exclusion_rules (BaseExclusionRules): Rules deciding which entries to skip.
        permission_action (PermissionAction): How unreadable subdirectories are handled.
        follow_symlinks (bool): Whether symbolic links are followed.

    Example:
        >>> walker = DirectoryWalker("/srv/project", exclude={"node_modules"})  # doctest: +SKIP
        >>> for entry in walker.entries():  # doctest: +SKIP
        ...     print(entry.relative_path, entry.is_directory)
        src True
        src/main.py False
    """

    def __init__(
        self,
        root_path: PathType,
        exclude: ExclusionSpec = None,
        permission_action: PermissionAction = PermissionAction.REPORT,
        follow_symlinks: bool = False,
        cwd: Optional[PathType] = None,
    ) -> None:
        """Initialize a DirectoryWalker.

        Args:
            root_path: Directory to walk. Relative paths are resolved against ``cwd``.
            exclude: Names to exclude, an exclusion rules object, or None for the default
                folder names. Pass an empty set to disable exclusion.
            permission_action: How to handle subdirectories that cannot be listed.
            follow_symlinks: Whether to follow symbolic links.
            cwd: Working directory for resolving a relative ``root_path``.

        Raises:
            InvalidArgumentError: If ``root_path`` is relative and ``cwd`` is None.
        """
        self.root_path = resolve_path(root_path, cwd)
        self.exclusion_rules = build_exclusion_rules(exclude)
        self.permission_action = PermissionAction(permission_action)
        self.follow_symlinks = follow_symlinks

    def __iter__(self) -> Iterator[WalkItem]:
        """Start a fresh traversal.

        Raises:
            NotFoundError: Immediately, if the root does not exist or is not a directory.
        """
        require_directory(self.root_path)
        return self._traverse()

    def entries(self) -> Iterator[FileEntry]:
        """Iterate over the FileEntry items of a fresh traversal, dropping WalkErrors."""
        for item in self:
            if isinstance(item, FileEntry):
                yield item

    def _traverse(self) -> Iterator[WalkItem]:
        visited: Set[FileIdentifier] = set()
        root_id = self._identify(self.root_path)
        if root_id is not None:
            visited.add(root_id)

        try:
            stack: List[_Pending] = self._list_children(str(self.root_path), "")
        except PermissionError as e:
            raise PermissionDeniedError(f"Access denied to {self.root_path}: {e.strerror or e}", self.root_path)
        stack.reverse()

        while stack:
            dir_entry, relative_path = stack.pop()
            entry = self._make_entry(dir_entry, relative_path)
            if entry is None:
                continue

            yield entry

            if not entry.is_directory:
                continue

            if self.follow_symlinks:
                dir_id = self._identify(Path(entry.path))
                if dir_id is not None:
                    if dir_id in visited:
                        continue
                    visited.add(dir_id)

            try:
                children = self._list_children(entry.path, relative_path)
            except PermissionError as e:
                yield from self._handle_unreadable(entry.path, relative_path, e)
                continue

            children.reverse()
            stack.extend(children)

    def _list_children(self, path: str, relative_path: str) -> List[_Pending]:
        """List a directory's children in enumeration order.

        PermissionError propagates to the caller; other OSErrors are mapped and raised.
        """
        try:
            with os.scandir(path) as it:
                return [(child, f"{relative_path}/{child.name}" if relative_path else child.name) for child in it]
        except PermissionError:
            raise
        except OSError as e:
            raise error_from_os(e, path) from e

    def _make_entry(self, dir_entry: os.DirEntry, relative_path: str) -> Optional[FileEntry]:  # type: ignore[type-arg]
        """Classify a child, apply the exclusion rules and stat it. Returns None if excluded."""
        try:
            is_symlink = dir_entry.is_symlink()
            is_dir = dir_entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError:
            is_symlink = False
            is_dir = False

        if self.exclusion_rules.exclude(relative_path + "/" if is_dir else relative_path):
            return None

        size = 0
        if not is_dir and (self.follow_symlinks or not is_symlink):
            try:
                size = dir_entry.stat(follow_symlinks=self.follow_symlinks).st_size
            except OSError:
                size = 0

        return FileEntry(
            path=dir_entry.path,
            relative_path=relative_path,
            is_directory=is_dir,
            size_in_bytes=size,
            is_symlink=is_symlink,
        )

    def _handle_unreadable(self, path: str, relative_path: str, error: PermissionError) -> Iterator[WalkError]:
        denied = PermissionDeniedError(f"Access denied to {path}: {error.strerror or error}", path)
        if self.permission_action == PermissionAction.RAISE:
            raise denied
        if self.permission_action == PermissionAction.REPORT:
            yield WalkError(path=path, relative_path=relative_path, error=denied)

    @staticmethod
    def _identify(path: Path) -> Optional[FileIdentifier]:
        try:
            return FileIdentifier.from_stat(path.stat())
        except OSError:
            return None


def walk(
    root: PathType,
    exclude: ExclusionSpec = None,
    *,
    cwd: Optional[PathType] = None,
    permission_action: PermissionAction = PermissionAction.REPORT,
    follow_symlinks: bool = False,
) -> Iterator[WalkItem]:
    """Walk ``root`` depth-first and return a lazy iterator of entries.

    See DirectoryWalker for the traversal rules. The root is validated when ``walk`` is
    called, not when the first item is pulled.

    Raises:
        NotFoundError: If the root does not exist or is not a directory.
        InvalidArgumentError: If ``root`` is relative and ``cwd`` is None.

    Example:
        >>> for item in walk("/srv/project", {"dist"}):  # doctest: +SKIP
        ...     print(item.relative_path)
        src
        src/main.py
    """
    walker = DirectoryWalker(
        root,
        exclude=exclude,
        permission_action=permission_action,
        follow_symlinks=follow_symlinks,
        cwd=cwd,
    )
    return iter(walker)
