"""Items yielded by a directory walk."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Union

from dirtools.exceptions import DirToolsError


@dataclass(frozen=True)
class FileEntry:
    """Snapshot of one filesystem object as seen when the walker visited it.

    Attributes:
        path (str): Absolute path of the entry.
        relative_path (str): Path relative to the walk root, "/"-separated.
        is_directory (bool): True for directories (and, when following symlinks, for
            links to directories).
        size_in_bytes (int): Size of the file; 0 for directories and unfollowed symlinks.
        is_symlink (bool): True if the entry itself is a symbolic link.

    Example:
        >>> entry = FileEntry("/srv/app/src/main.py", "src/main.py", False, 120)
        >>> entry.name
        'main.py'
        >>> entry.depth
        2
    """

    path: str
    relative_path: str
    is_directory: bool
    size_in_bytes: int = 0
    is_symlink: bool = False

    @property
    def name(self) -> str:
        return PurePosixPath(self.relative_path).name

    @property
    def depth(self) -> int:
        """Number of path components below the walk root (direct children are at depth 1)."""
        return len(PurePosixPath(self.relative_path).parts)


@dataclass(frozen=True)
class WalkError:
    """A subtree the walker could not read.

    The walker yields these in place of the unreadable directory's children and then
    carries on with the next sibling.

    Attributes:
        path (str): Absolute path of the directory that could not be listed.
        relative_path (str): Path relative to the walk root ("" for the root itself).
        error (DirToolsError): The failure, normally a PermissionDeniedError.
    """

    path: str
    relative_path: str
    error: DirToolsError

    def __str__(self) -> str:
        return str(self.error)


WalkItem = Union[FileEntry, WalkError]
