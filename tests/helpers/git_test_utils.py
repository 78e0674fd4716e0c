"""Git test utilities for unit and integration tests.

These utilities create real git repositories in temporary directories: a
bare repository acting as the remote and a working copy cloned from it,
which is what the export writes into.

Usage:
    from tests.helpers.git_test_utils import create_clone_with_remote

    work_path = create_clone_with_remote(tmp_path)
"""

import subprocess
from pathlib import Path


def git(repo_path: Path, *args: str) -> str:
    """Run a git command and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo_path,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


def create_clone_with_remote(base_path: Path) -> Path:
    """Create a bare remote and a configured working copy of it.

    Args:
        base_path: Directory to create both repositories in

    Returns:
        Path to the working copy (its origin is the bare repository)
    """
    remote_path = base_path / "remote.git"
    work_path = base_path / "docs"

    subprocess.run(
        ["git", "init", "--bare", "-b", "master", str(remote_path)],
        check=True,
        capture_output=True,
    )
    subprocess.run(
        ["git", "clone", str(remote_path), str(work_path)],
        check=True,
        capture_output=True,
    )

    git(work_path, "config", "user.name", "Test User")
    git(work_path, "config", "user.email", "test@example.com")
    git(work_path, "checkout", "-B", "master")
    return work_path
