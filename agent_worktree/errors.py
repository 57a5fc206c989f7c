"""Error types raised by worktree operations.

Every error carries a message meant for the user; the command layer
prints it and exits with status 1.
"""

from pathlib import Path


class WorktreeError(Exception):
    """Base class for all agent-worktree failures."""


class NotAGitRepositoryError(WorktreeError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"not a git repository: {path}")


class InvalidNameError(WorktreeError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"invalid worktree name '{name}' "
            "(use letters, digits, '-', '_' or '.'; no slashes or leading '-')"
        )


class BaseBranchNotFoundError(WorktreeError):
    def __init__(self, base: str):
        self.base = base
        super().__init__(f"base branch '{base}' does not exist")


class WorktreeExistsError(WorktreeError):
    def __init__(self, name: str, detail: str):
        self.name = name
        super().__init__(f"worktree '{name}' already exists ({detail})")


class GitCommandFailedError(WorktreeError):
    """A git invocation exited non-zero.

    ``stderr`` holds git's own message, which is what the user sees.
    """

    def __init__(self, command: str, stderr: str):
        self.command = command
        self.stderr = stderr
        super().__init__(f"git {command} failed: {stderr}")
