"""Git operations using GitPython.

``GitRepo`` is the only place that talks to git. Everything is run
against the main worktree, so commands behave the same when invoked
from inside one of the agent worktrees.
"""

import logging
from pathlib import Path

from git import Repo
from git.exc import GitCommandError, InvalidGitRepositoryError, NoSuchPathError

from .errors import GitCommandFailedError, NotAGitRepositoryError

logger = logging.getLogger(__name__)

_STDERR_PREFIX = "stderr: '"


def _stderr_text(error: GitCommandError) -> str:
    """Extract git's message from a GitCommandError."""
    # GitPython stores stderr pre-formatted as "\n  stderr: '<text>'"
    text = error.stderr.strip() if isinstance(error.stderr, str) else ""
    if text.startswith(_STDERR_PREFIX) and text.endswith("'"):
        text = text[len(_STDERR_PREFIX) : -1]
    return text.strip() or str(error)


def parse_worktree_list(output: str) -> dict[Path, str | None]:
    """Parse ``git worktree list --porcelain``.

    Returns a mapping of worktree path to branch name; detached and
    bare worktrees map to None.
    """
    worktrees: dict[Path, str | None] = {}
    current: Path | None = None

    for line in output.splitlines():
        if line.startswith("worktree "):
            current = Path(line[len("worktree ") :]).resolve()
            worktrees[current] = None
        elif line.startswith("branch ") and current is not None:
            ref = line[len("branch ") :]
            worktrees[current] = ref.removeprefix("refs/heads/")
        elif not line:
            current = None

    return worktrees


class GitRepo:
    """Git repository rooted at its main worktree."""

    def __init__(self, root: Path):
        self.root = root
        self._repo = Repo(root)

    @classmethod
    def discover(cls, path: Path | None = None) -> "GitRepo":
        """Find the repository containing ``path`` (default: cwd).

        Raises NotAGitRepositoryError outside a repository.
        """
        start = path or Path.cwd()
        try:
            repo = Repo(start, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepositoryError(start) from e

        if repo.bare:
            raise NotAGitRepositoryError(start)

        # common_dir is the main .git even when started inside a linked worktree
        return cls(Path(repo.common_dir).resolve().parent)

    def _run(self, command: str, *args: str) -> str:
        """Run ``git <command> <args>`` in the repository root."""
        logger.debug("git %s %s", command, " ".join(args))
        try:
            return getattr(self._repo.git, command.replace("-", "_"))(*args)
        except GitCommandError as e:
            raise GitCommandFailedError(command, _stderr_text(e)) from e

    def current_branch(self) -> str | None:
        """Branch checked out in the main worktree, None when detached."""
        try:
            return self._repo.active_branch.name
        except TypeError:
            return None

    def commit_exists(self, rev: str) -> bool:
        try:
            self._run("rev-parse", "--verify", "--quiet", f"{rev}^{{commit}}")
        except GitCommandFailedError:
            return False
        return True

    def branch_exists(self, branch: str) -> bool:
        return any(head.name == branch for head in self._repo.heads)

    def is_valid_branch_name(self, branch: str) -> bool:
        try:
            self._run("check-ref-format", "--branch", branch)
        except GitCommandFailedError:
            return False
        return True

    def add_worktree(self, path: Path, branch: str, base: str) -> None:
        """Check out a new ``branch`` forked from ``base`` at ``path``."""
        self._run("worktree", "add", "-b", branch, str(path), base)

    def remove_worktree(self, path: Path) -> None:
        """Remove the worktree at ``path``, discarding local changes."""
        self._run("worktree", "remove", "--force", str(path))

    def delete_branch(self, branch: str) -> None:
        """Delete ``branch`` even if it has unmerged commits."""
        self._run("branch", "-D", branch)

    def prune_worktrees(self) -> None:
        """Forget worktrees whose directories no longer exist."""
        self._run("worktree", "prune")

    def list_worktrees(self) -> dict[Path, str | None]:
        return parse_worktree_list(self._run("worktree", "list", "--porcelain"))

    def ahead_behind(self, branch: str, base: str) -> tuple[int, int]:
        """Count commits on ``branch`` not on ``base``, and the reverse.

        Both counts are relative to the merge base of the two.
        """
        output = self._run("rev-list", "--left-right", "--count", f"{base}...{branch}")
        behind, ahead = output.split()
        return int(ahead), int(behind)

    def get_config(self, key: str) -> str | None:
        try:
            return self._run("config", "--get", key).strip() or None
        except GitCommandFailedError:
            return None

    def set_config(self, key: str, value: str) -> None:
        self._run("config", key, value)
