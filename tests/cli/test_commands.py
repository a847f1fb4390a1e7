"""Tests for the dirtools subcommands, driven through main()."""

import os
from unittest.mock import patch

import pytest

from dirtools.cli.commands import EXIT_ERROR, EXIT_PERMISSION_DENIED, exit_code_for, format_summary
from dirtools.cli.main import main
from dirtools.cli.signal_handler import SignalHandler
from dirtools.exceptions import NotFoundError, PermissionDeniedError


@pytest.fixture(autouse=True)
def isolated_signals():
    handler = SignalHandler()
    with (
        patch("dirtools.cli.main.setup_signal_handling"),
        patch("dirtools.cli.main.signal_handler", handler),
        patch("dirtools.cli.safe_writer.signal_handler", handler),
    ):
        yield handler


@pytest.fixture
def in_project(project_tree, monkeypatch):
    monkeypatch.chdir(project_tree)
    return project_tree


def test_exit_code_for():
    assert exit_code_for(PermissionDeniedError("denied")) == EXIT_PERMISSION_DENIED
    assert exit_code_for(PermissionError("denied")) == EXIT_PERMISSION_DENIED
    assert exit_code_for(NotFoundError("gone")) == EXIT_ERROR
    assert exit_code_for(RuntimeError("other")) == EXIT_ERROR


def test_format_summary():
    assert format_summary(1, 2, 0, 3 * 1024**2) == "Directories: 1\nFiles: 2\nSymlinks: 0\nSize: 3.00 MB"


def test_walk_without_default_excludes(in_project, capsys):
    main(["walk", ".", "-X"])
    out = capsys.readouterr().out
    assert f"{in_project / 'node_modules' / 'pkg' / 'index.js'}\tFalse" in out.splitlines()


def test_walk_custom_exclude_and_pattern(in_project, capsys):
    main(["walk", ".", "--exclude", "docs", "-i", "*.json"])
    paths = [line.split("\t")[0] for line in capsys.readouterr().out.splitlines()]
    assert not any(path.endswith(".json") for path in paths)
    assert not any(os.sep + "docs" in path for path in paths)
    assert str(in_project / "node_modules" / "pkg" / "index.js") in paths


def test_walk_summary(in_project, capsys):
    main(["walk", ".", "-s"])
    captured = capsys.readouterr()
    assert "Directories: 3" in captured.err
    assert "Files: 4" in captured.err
    assert "Size: 0.04 KB" in captured.err


def test_walk_to_output_file(in_project, capsys):
    main(["walk", "src", "-o", "listing.txt"])
    assert capsys.readouterr().out == ""
    lines = (in_project / "listing.txt").read_text().splitlines()
    assert len(lines) == 3


def test_walk_permission_modes(in_project, capsys, monkeypatch):
    real_scandir = os.scandir

    def scandir(path):
        if os.path.basename(path) == "docs":
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", scandir)

    main(["walk", "."])
    captured = capsys.readouterr()
    assert "Warning: Access denied" in captured.err
    assert str(in_project / "src" / "main.py") in captured.out
    assert str(in_project / "package.json") in captured.out

    main(["walk", ".", "-P", "ignore"])
    assert capsys.readouterr().err == ""

    with pytest.raises(SystemExit) as exc_info:
        main(["walk", ".", "-P", "fail"])
    assert exc_info.value.code == 126
    assert "Error: Access denied" in capsys.readouterr().err


def test_walk_and_tree_summaries_agree_on_symlinks(in_project, capsys, can_symlink):
    if not can_symlink:
        pytest.skip("Symlink creation not supported on this platform/environment")
    os.symlink(in_project / "package.json", in_project / "package_link.json")

    main(["walk", ".", "-s"])
    walk_summary = capsys.readouterr().err
    main(["tree", ".", "-s"])
    tree_summary = capsys.readouterr().err

    assert walk_summary == tree_summary
    assert "Files: 4" in walk_summary
    assert "Symlinks: 1" in walk_summary


def test_tree(in_project, capsys):
    main(["tree", "src", "-s"])
    captured = capsys.readouterr()
    assert captured.out == "src/\n├── utils/\n│   └── helpers.py\n└── main.py\n"
    assert "Directories: 1" in captured.err
    assert "Files: 2" in captured.err


def test_tree_missing_root(in_project, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["tree", "missing"])
    assert exc_info.value.code == 1


def test_cp_and_mv(in_project, capsys):
    main(["cp", "package.json", "docs"])
    assert (in_project / "docs" / "package.json").exists()
    assert "Copied to" in capsys.readouterr().out

    main(["mv", "docs/package.json", "moved.json"])
    assert (in_project / "moved.json").exists()
    assert not (in_project / "docs" / "package.json").exists()


def test_cp_existing_requires_force(in_project, capsys):
    (in_project / "copy.json").write_text("old")
    with pytest.raises(SystemExit) as exc_info:
        main(["cp", "package.json", "copy.json"])
    assert exc_info.value.code == 1
    assert "already exists" in capsys.readouterr().err

    main(["cp", "-f", "package.json", "copy.json"])
    assert (in_project / "copy.json").read_text() == (in_project / "package.json").read_text()


def test_rename_and_rm(in_project, capsys):
    main(["rename", "docs", "documentation"])
    assert (in_project / "documentation" / "README.md").exists()

    main(["rm", "documentation"])
    assert not (in_project / "documentation").exists()
    assert "Removed" in capsys.readouterr().out


def test_ln(in_project, capsys, can_symlink):
    if not can_symlink:
        pytest.skip("Symlink creation not supported on this platform/environment")
    main(["ln", "src", "src_link"])
    assert (in_project / "src_link").is_symlink()
    assert (in_project / "src_link" / "main.py").exists()


def test_touch(in_project, capsys):
    main(["touch", "case", "txt", "-n", "2", "-d", "docs"])
    assert (in_project / "docs" / "case1.txt").exists()
    assert (in_project / "docs" / "case2.txt").exists()
    assert capsys.readouterr().out.count("Created") == 2
