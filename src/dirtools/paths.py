"""Path resolution against an explicit working directory."""

from pathlib import Path
from typing import Optional

from dirtools.exceptions import InvalidArgumentError, NotFoundError
from dirtools.types import PathType


def resolve_path(path: PathType, cwd: Optional[PathType] = None) -> Path:
    """Resolve a path argument against an explicit working directory.

    Absolute paths are returned unchanged. Relative paths are joined onto ``cwd``; the
    process working directory is never consulted.

    Args:
        path: The path argument to resolve.
        cwd: The working directory that relative paths are relative to.

    Returns:
        An absolute Path (symlinks are not resolved).

    Raises:
        InvalidArgumentError: If ``path`` is empty, or relative while ``cwd`` is None.

    Example:
        >>> str(resolve_path("docs/readme.md", "/home/user/project"))
        '/home/user/project/docs/readme.md'
        >>> str(resolve_path("/etc/hosts", "/home/user"))
        '/etc/hosts'
    """
    if not str(path):
        raise InvalidArgumentError("Path must not be empty")

    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    if cwd is None:
        raise InvalidArgumentError(f"Relative path requires a working directory: {path}", path)

    base = Path(cwd)
    if not base.is_absolute():
        raise InvalidArgumentError(f"Working directory must be absolute: {cwd}", cwd)
    return base / candidate


def require_directory(path: Path) -> Path:
    """Check that ``path`` exists and is a directory.

    Raises:
        NotFoundError: If the path does not exist or is not a directory.
    """
    if not path.exists():
        raise NotFoundError(f"Path does not exist: {path}", path)
    if not path.is_dir():
        raise NotFoundError(f"Path is not a directory: {path}", path)
    return path


def require_existing(path: Path) -> Path:
    """Check that ``path`` exists. Dangling symlinks count as existing.

    Raises:
        NotFoundError: If nothing exists at the path.
    """
    if not path.exists() and not path.is_symlink():
        raise NotFoundError(f"Path does not exist: {path}", path)
    return path
