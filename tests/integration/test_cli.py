"""Integration tests for the command-line interface.

These run the ``dirtools`` module in a subprocess and cover:
- Default and custom exclusions
- Tree rendering and summaries
- Exit codes for missing paths, usage errors and permission failures
- The filesystem helper subcommands
- Broken pipe handling
"""

import os
import platform
import subprocess
import sys
from pathlib import Path

import pytest

# Slow subprocess tests only run when --run-cli-tests is given
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


def run_cli(args, cwd=None, timeout=10):
    """Run the dirtools CLI with the given arguments.

    Args:
        args: List of CLI arguments
        cwd: Working directory
        timeout: Maximum time to wait for command to complete

    Returns:
        CompletedProcess object with stdout/stderr as text
    """
    cmd = [sys.executable, "-m", "dirtools.cli.main"] + args
    return subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=cwd, timeout=timeout)


def listed_paths(stdout):
    return [line.split("\t")[0] for line in stdout.splitlines()]


def test_version():
    result = run_cli(["--version"])
    assert result.returncode == 0
    assert result.stdout.startswith("dirtools ")


def test_missing_subcommand():
    result = run_cli([])
    assert result.returncode == 2


def test_walk_default_exclusions(project_tree):
    result = run_cli(["walk", "."], cwd=project_tree)
    assert result.returncode == 0
    paths = listed_paths(result.stdout)
    assert str(project_tree / "src" / "main.py") in paths
    assert not any("node_modules" in path or ".next" in path for path in paths)
    assert f"{project_tree / 'src'}\tTrue" in result.stdout.splitlines()


def test_walk_ignore_file(project_tree):
    (project_tree / ".gitignore").write_text("*.md\nutils/\n")
    result = run_cli(["walk", str(project_tree), "-e", str(project_tree / ".gitignore")])
    assert result.returncode == 0
    paths = listed_paths(result.stdout)
    assert str(project_tree / "docs") in paths
    assert str(project_tree / "docs" / "README.md") not in paths
    assert not any("utils" in path for path in paths)


def test_walk_missing_root(tmp_path):
    result = run_cli(["walk", "missing"], cwd=tmp_path)
    assert result.returncode == 1
    assert result.stderr.startswith("Error: Path does not exist")


def test_walk_permission_fail(project_tree, can_restrict_permissions):
    if not can_restrict_permissions:
        pytest.skip("Permission restrictions are not enforced for this user")
    os.chmod(project_tree / "docs", 0)
    try:
        warned = run_cli(["walk", "."], cwd=project_tree)
        assert warned.returncode == 0
        assert "Warning: Access denied" in warned.stderr

        failed = run_cli(["walk", ".", "--permission-action", "fail"], cwd=project_tree)
        assert failed.returncode == 126
    finally:
        os.chmod(project_tree / "docs", 0o755)


def test_tree_with_summary(project_tree):
    result = run_cli(["tree", ".", "-X", "--summary"], cwd=project_tree)
    assert result.returncode == 0
    lines = result.stdout.splitlines()
    assert lines[0] == f"{project_tree.name}/"
    assert "├── node_modules/" in lines
    assert "Files: 6" in result.stderr
    assert "Size: 0.06 KB" in result.stderr


def test_size(project_tree):
    raw = run_cli(["size", "."], cwd=project_tree)
    assert raw.returncode == 0
    assert raw.stdout.strip() == "58"

    human = run_cli(["size", ".", "--human"], cwd=project_tree)
    assert human.stdout.strip() == "0.06 KB"


def test_file_operations(tmp_path):
    assert run_cli(["touch", "note", "txt", "-n", "2"], cwd=tmp_path).returncode == 0
    assert (tmp_path / "note1.txt").exists()
    assert (tmp_path / "note2.txt").exists()

    assert run_cli(["cp", "note1.txt", "copy.txt"], cwd=tmp_path).returncode == 0
    assert run_cli(["mv", "note2.txt", "moved.txt"], cwd=tmp_path).returncode == 0
    assert run_cli(["rename", "copy.txt", "renamed.txt"], cwd=tmp_path).returncode == 0
    assert run_cli(["rm", "moved.txt"], cwd=tmp_path).returncode == 0

    assert sorted(path.name for path in tmp_path.iterdir()) == ["note1.txt", "renamed.txt"]


def test_failed_operation_exit_code(tmp_path):
    result = run_cli(["rm", "missing.txt"], cwd=tmp_path)
    assert result.returncode == 1
    assert result.stderr.startswith("Error:")


def test_invalid_touch_count(tmp_path):
    result = run_cli(["touch", "note", "txt", "-n", "zero"], cwd=tmp_path)
    assert result.returncode == 1
    assert "Count must be a positive integer" in result.stderr
    assert list(tmp_path.iterdir()) == []


@pytest.mark.skipif(platform.system() == "Windows", reason="SIGPIPE test requires a Unix shell")
def test_sigpipe(tmp_path):
    for index in range(500):
        (tmp_path / f"file{index}.txt").write_text("")

    process = subprocess.Popen(
        f"{sys.executable} -m dirtools.cli.main walk {tmp_path} | head -n 5",
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
    stdout, stderr = process.communicate(timeout=10)

    assert len(stdout.splitlines()) == 5
    assert "Traceback" not in stderr
    assert Path(stdout.splitlines()[0].split("\t")[0]).parent == tmp_path
