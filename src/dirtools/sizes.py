"""Folder size aggregation and human-readable size formatting."""

from typing import Optional, Tuple

from dirtools.exceptions import InvalidArgumentError
from dirtools.result import returns_result
from dirtools.types import PathType
from dirtools.walker.directory_walker import DirectoryWalker
from dirtools.walker.permission_action import PermissionAction

KILOBYTE = 1024
MEGABYTE = 1024**2
GIGABYTE = 1024**3


@returns_result
def total_size(
    root: PathType,
    *,
    cwd: Optional[PathType] = None,
    permission_action: PermissionAction = PermissionAction.IGNORE,
) -> int:
    """Sum the sizes of all files beneath ``root``.

    No exclusion rules are applied, so the total always reflects the full subtree.
    Directories contribute nothing, and neither do symbolic links, which are not followed.

    Args:
        root: Directory to measure. Relative paths are resolved against ``cwd``.
        cwd: Working directory for resolving a relative ``root``.
        permission_action: How unreadable subdirectories are handled. With the default
            IGNORE they are left out of the total.

    Returns:
        OperationResult carrying the byte count, or a NotFoundError if ``root`` does not
        exist or is not a directory.

    Example:
        >>> total_size("/srv/project").unwrap()  # doctest: +SKIP
        48213
    """
    walker = DirectoryWalker(root, exclude=set(), permission_action=permission_action, cwd=cwd)
    return sum(entry.size_in_bytes for entry in walker.entries() if not entry.is_directory)


def format_size(size_in_bytes: int) -> Tuple[str, str]:
    """Format a byte count as a (value, unit) pair with two decimals.

    Units are chosen with 1024-based divisors but labelled GB, MB and KB. A count of
    exactly one mebibyte or gibibyte already switches to the larger unit; everything
    below one mebibyte is reported in KB.

    Raises:
        InvalidArgumentError: If ``size_in_bytes`` is negative.

    Example:
        >>> format_size(0)
        ('0.00', 'KB')
        >>> format_size(1536)
        ('1.50', 'KB')
        >>> format_size(1_048_576)
        ('1.00', 'MB')
        >>> format_size(5 * 1024**3)
        ('5.00', 'GB')
    """
    if size_in_bytes < 0:
        raise InvalidArgumentError(f"Size cannot be negative, got {size_in_bytes}")

    if size_in_bytes >= GIGABYTE:
        return f"{size_in_bytes / GIGABYTE:.2f}", "GB"
    if size_in_bytes >= MEGABYTE:
        return f"{size_in_bytes / MEGABYTE:.2f}", "MB"
    return f"{size_in_bytes / KILOBYTE:.2f}", "KB"
