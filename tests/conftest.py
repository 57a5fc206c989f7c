"""Pytest fixtures for agent-worktree tests."""

import subprocess
import tempfile
from pathlib import Path

import pytest

from agent_worktree import config
from agent_worktree.config import Settings


def git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Use default settings, ignoring the user's env file and environment."""
    monkeypatch.setattr(config, "_settings", Settings(_env_file=None))


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def temp_git_repo(temp_dir):
    """Create temporary git repository on branch main with two commits."""
    repo = temp_dir / "repo"
    repo.mkdir()

    git(repo, "init", "--quiet")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "user.name", "Test")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "commit", "--allow-empty", "-m", "initial", "--quiet")

    (repo / "README.md").write_text("hello\n")
    git(repo, "add", "README.md")
    git(repo, "commit", "-m", "add readme", "--quiet")

    return repo


@pytest.fixture
def in_repo(temp_git_repo, monkeypatch):
    """Run the test from inside the temporary repository."""
    monkeypatch.chdir(temp_git_repo)
    return temp_git_repo


@pytest.fixture
def run_git():
    """Helper for running git directly in tests."""
    return git
