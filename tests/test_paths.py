"""Tests for path resolution helpers."""

from pathlib import Path

import pytest

from dirtools.exceptions import InvalidArgumentError, NotFoundError
from dirtools.paths import require_directory, require_existing, resolve_path


def test_absolute_path_ignores_cwd(tmp_path):
    assert resolve_path(tmp_path, "/elsewhere") == tmp_path


def test_relative_path_joined_to_cwd(tmp_path):
    assert resolve_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"


def test_relative_path_keeps_dot_dot(tmp_path):
    assert resolve_path("../x", tmp_path) == tmp_path / ".." / "x"


def test_relative_path_requires_cwd():
    with pytest.raises(InvalidArgumentError, match="working directory"):
        resolve_path("a.txt")


def test_relative_cwd_rejected():
    with pytest.raises(InvalidArgumentError):
        resolve_path("a.txt", "relative/dir")


def test_empty_path_rejected(tmp_path):
    with pytest.raises(InvalidArgumentError):
        resolve_path("", tmp_path)


def test_require_directory(tmp_path):
    assert require_directory(tmp_path) == tmp_path
    with pytest.raises(NotFoundError, match="does not exist"):
        require_directory(tmp_path / "missing")

    file_path = tmp_path / "f"
    file_path.write_text("")
    with pytest.raises(NotFoundError, match="not a directory"):
        require_directory(file_path)


def test_require_existing_accepts_dangling_symlink(tmp_path, can_symlink):
    if not can_symlink:
        pytest.skip("Symlink creation not supported on this platform/environment")
    link = tmp_path / "dangling"
    link.symlink_to(tmp_path / "nowhere")
    assert require_existing(link) == link


def test_require_existing_missing(tmp_path):
    with pytest.raises(NotFoundError):
        require_existing(Path(tmp_path) / "missing")
