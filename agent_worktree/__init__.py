"""agent-worktree — git worktrees for parallel coding-agent sessions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("agent-worktree")
except PackageNotFoundError:
    __version__ = "0.0.0"
