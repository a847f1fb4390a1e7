"""Test configuration and fixtures for dirtools."""

import os

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def project_tree(tmp_path):
    """Create a small project with default-excluded folders and files of known size."""
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "main.py").write_text("print('hello')\n")  # 15 bytes
    (tmp_path / "src" / "utils").mkdir()
    (tmp_path / "src" / "utils" / "helpers.py").write_text("x = 1\n")  # 6 bytes
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "README.md").write_text("# Docs\n")  # 7 bytes
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "pkg").mkdir()
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("export {}\n")  # 10 bytes
    (tmp_path / ".next").mkdir()
    (tmp_path / ".next" / "build.json").write_text("{}\n")  # 3 bytes
    (tmp_path / "package.json").write_text('{"name": "demo"}\n')  # 17 bytes
    return tmp_path


@pytest.fixture
def can_symlink(tmp_path):
    """Whether symbolic links can be created in this environment."""
    try:
        os.symlink(tmp_path, tmp_path / "probe-link")
    except (OSError, NotImplementedError):
        return False
    os.unlink(tmp_path / "probe-link")
    return True


@pytest.fixture
def can_restrict_permissions():
    """Whether chmod actually restricts access (it does not for root)."""
    return hasattr(os, "geteuid") and os.geteuid() != 0
