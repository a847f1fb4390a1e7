"""Thin filesystem helpers: copy, move, rename, remove, link and create.

Every helper resolves its path arguments against an explicit working directory and
returns an OperationResult instead of raising. Nothing is rolled back when an operation
fails halfway: a partially completed copy or removal stays as it is.

Example:
    >>> result = remove_path("build", cwd="/srv/project")  # doctest: +SKIP
    >>> result.ok  # doctest: +SKIP
    True
"""

import os
import shutil
from pathlib import Path
from typing import List, Optional

from dirtools.exceptions import AlreadyExistsError, InvalidArgumentError
from dirtools.paths import require_directory, require_existing, resolve_path
from dirtools.result import returns_result
from dirtools.types import PathType


def _check_bare_name(name: str, what: str) -> str:
    if not name or not name.strip():
        raise InvalidArgumentError(f"{what} must not be empty")
    if name in (".", "..") or "/" in name or (os.altsep and os.altsep in name) or os.sep in name:
        raise InvalidArgumentError(f"{what} must be a plain name without path separators: {name!r}", name)
    return name


def _target_for(source: Path, destination: Path) -> Path:
    # Copying or moving onto an existing directory places the source inside it
    if destination.is_dir() and not destination.is_symlink():
        return destination / source.name
    return destination


def _clear(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def _occupied(path: Path) -> bool:
    return path.exists() or path.is_symlink()


def _real(path: Path) -> Path:
    # Resolves the parent directories but not a symlink in the last component
    if path.name in ("", ".."):
        return path.resolve()
    return path.parent.resolve() / path.name


def _check_placement(source: Path, target: Path) -> bool:
    """Reject targets that would destroy the source. Returns True if both name the same entry."""
    real_source = _real(source)
    real_target = _real(target)
    if real_target == real_source:
        return True
    if real_target in real_source.parents:
        raise InvalidArgumentError(f"Destination contains the source: {source} -> {target}", target)
    if source.is_dir() and not source.is_symlink() and real_source in real_target.parents:
        raise InvalidArgumentError(f"Cannot place a directory inside itself: {source} -> {target}", target)
    return False


@returns_result
def copy_path(
    source: PathType, destination: PathType, *, cwd: Optional[PathType] = None, overwrite: bool = False
) -> Path:
    """Copy a file or a whole directory tree.

    Symlinks inside a copied tree are copied as links. If ``destination`` is an existing
    directory, the source is copied into it.

    Returns:
        OperationResult carrying the path of the copy. Fails with NotFoundError if the
        source is missing and AlreadyExistsError if the target is taken and ``overwrite``
        is False. Fails with InvalidArgumentError if the target contains the source or lies
        inside it.
    """
    src = require_existing(resolve_path(source, cwd))
    dst = _target_for(src, resolve_path(destination, cwd))
    if _check_placement(src, dst):
        raise AlreadyExistsError(f"Source and destination are the same: {src}", src)
    if _occupied(dst):
        if not overwrite:
            raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        _clear(dst)

    if src.is_dir() and not src.is_symlink():
        shutil.copytree(src, dst, symlinks=True)
    else:
        shutil.copy2(src, dst, follow_symlinks=False)
    return dst


@returns_result
def move_path(
    source: PathType, destination: PathType, *, cwd: Optional[PathType] = None, overwrite: bool = False
) -> Path:
    """Move a file or directory, across filesystems if needed.

    If ``destination`` is an existing directory, the source is moved into it.

    Returns:
        OperationResult carrying the new path. Fails with NotFoundError if the source is
        missing and AlreadyExistsError if the target is taken and ``overwrite`` is False.
        A target that contains the source, or lies inside it, is an InvalidArgumentError.
    """
    src = require_existing(resolve_path(source, cwd))
    dst = _target_for(src, resolve_path(destination, cwd))
    if _check_placement(src, dst):
        return dst
    if _occupied(dst):
        if not overwrite:
            raise AlreadyExistsError(f"Destination already exists: {dst}", dst)
        _clear(dst)

    shutil.move(str(src), str(dst))
    return dst


@returns_result
def rename_path(path: PathType, new_name: str, *, cwd: Optional[PathType] = None) -> Path:
    """Rename a file or directory in place.

    Returns:
        OperationResult carrying the renamed path. Fails with InvalidArgumentError if
        ``new_name`` is not a plain name, NotFoundError if ``path`` is missing and
        AlreadyExistsError if the new name is taken.
    """
    _check_bare_name(new_name, "New name")
    src = require_existing(resolve_path(path, cwd))
    dst = src.with_name(new_name)

    if dst == src:
        return dst
    if _occupied(dst):
        raise AlreadyExistsError(f"Destination already exists: {dst}", dst)

    src.rename(dst)
    return dst


@returns_result
def remove_path(path: PathType, *, cwd: Optional[PathType] = None) -> Path:
    """Force-remove a file, symlink or directory tree.

    Symbolic links are removed themselves; their targets are untouched.

    Returns:
        OperationResult carrying the removed path. Fails with NotFoundError, without
        touching the filesystem, if nothing exists at ``path``.
    """
    target = require_existing(resolve_path(path, cwd))
    _clear(target)
    return target


@returns_result
def create_symlink(target: PathType, link: PathType, *, cwd: Optional[PathType] = None) -> Path:
    """Create a symbolic link at ``link`` pointing to ``target``.

    The link stores the absolute target path.

    Returns:
        OperationResult carrying the link path. Fails with NotFoundError if the target is
        missing and AlreadyExistsError if something already exists at ``link``.
    """
    target_path = require_existing(resolve_path(target, cwd))
    link_path = resolve_path(link, cwd)

    if _occupied(link_path):
        raise AlreadyExistsError(f"Link path already exists: {link_path}", link_path)

    link_path.symlink_to(target_path, target_is_directory=target_path.is_dir())
    return link_path


@returns_result
def create_files(
    name: str,
    extension: str,
    count: int = 1,
    *,
    directory: Optional[PathType] = None,
    cwd: Optional[PathType] = None,
) -> List[Path]:
    """Create one or more empty files.

    A single file is called ``name.extension``; for ``count`` > 1 the files are numbered
    ``name1.extension`` to ``nameN.extension``. Existing files are touched, not truncated.

    Args:
        name: Base file name, without separators.
        extension: File extension, with or without the leading dot.
        count: How many files to create.
        directory: Where to create them. Defaults to ``cwd``.
        cwd: Working directory for resolving ``directory``.

    Returns:
        OperationResult carrying the created paths. Fails with InvalidArgumentError for a
        non-positive count or a malformed name or extension, and with NotFoundError if the
        directory does not exist.
    """
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidArgumentError(f"Count must be a positive integer, got {count!r}")
    _check_bare_name(name, "Name")
    suffix = _check_bare_name(extension.lstrip("."), "Extension")

    if directory is None:
        if cwd is None:
            raise InvalidArgumentError("A directory or working directory is required")
        directory = cwd
    folder = require_directory(resolve_path(directory, cwd))

    if count == 1:
        names = [f"{name}.{suffix}"]
    else:
        names = [f"{name}{index}.{suffix}" for index in range(1, count + 1)]

    created = []
    for file_name in names:
        path = folder / file_name
        path.touch(exist_ok=True)
        created.append(path)
    return created
