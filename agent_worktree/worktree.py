"""Worktree lifecycle: create, list and clean up agent worktrees.

Each agent worktree lives at ``<root>/.trees/<name>`` and is checked out
on its own branch ``agent/<name>``. The base it was forked from is kept
in the branch's git config, so git deletes it together with the branch.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .config import Settings, get_settings
from .errors import (
    BaseBranchNotFoundError,
    GitCommandFailedError,
    InvalidNameError,
    WorktreeError,
    WorktreeExistsError,
)
from .git import GitRepo
from .gitignore import ensure_entry

logger = logging.getLogger(__name__)

BASE_CONFIG_KEY = "agentWorktreeBase"


@dataclass
class CreatedWorktree:
    """Outcome of a successful create."""

    name: str
    path: Path
    branch: str
    base: str
    gitignore_updated: bool = False
    instructions_path: Path | None = None


@dataclass
class WorktreeInfo:
    """State of one directory under the trees directory."""

    name: str
    path: Path
    registered: bool
    branch: str | None = None
    base: str | None = None
    ahead: int | None = None
    behind: int | None = None

    @property
    def branch_display(self) -> str:
        if self.branch:
            return self.branch
        return "(detached)" if self.registered else "(not a worktree)"

    @property
    def status(self) -> str:
        if self.ahead is None or self.behind is None:
            return "?"
        return f"{self.ahead} ahead, {self.behind} behind"


@dataclass
class CleanupResult:
    """Outcome of cleaning up one worktree."""

    name: str
    path: Path
    branch: str
    removed: bool
    branch_deleted: bool = False


class WorktreeManager:
    """Runs the worktree subcommands against one repository."""

    def __init__(self, git: GitRepo, settings: Settings | None = None):
        self.git = git
        self.settings = settings or get_settings()

    @classmethod
    def from_cwd(cls, settings: Settings | None = None) -> "WorktreeManager":
        """Manager for the repository containing the current directory."""
        return cls(GitRepo.discover(), settings)

    @property
    def root(self) -> Path:
        return self.git.root

    @property
    def trees_path(self) -> Path:
        return self.root / self.settings.trees_dir

    def worktree_path(self, name: str) -> Path:
        return self.trees_path / name

    def branch_for(self, name: str) -> str:
        return f"{self.settings.branch_prefix}{name}"

    def validate_name(self, name: str) -> None:
        """Reject names that would escape the trees directory or break the branch name."""
        separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
        if (
            not name
            or name in (".", "..")
            or name.startswith("-")
            or any(sep in name for sep in separators)
        ):
            raise InvalidNameError(name)
        if not self.git.is_valid_branch_name(self.branch_for(name)):
            raise InvalidNameError(name)

    def worktree_names(self) -> list[str]:
        """Names of all directories under the trees directory, sorted."""
        if not self.trees_path.is_dir():
            return []
        return sorted(p.name for p in self.trees_path.iterdir() if p.is_dir())

    # ------------------------------------------------------------------
    # create
    # ------------------------------------------------------------------

    def create(
        self,
        name: str,
        base: str | None = None,
        instructions: str | None = None,
    ) -> CreatedWorktree:
        """Create ``.trees/<name>`` on a new branch forked from ``base``.

        ``base`` defaults to the branch checked out in the main worktree
        (``HEAD`` when detached).
        """
        self.validate_name(name)

        path = self.worktree_path(name)
        branch = self.branch_for(name)
        if path.exists():
            raise WorktreeExistsError(name, f"{path.relative_to(self.root)} is present")
        if self.git.branch_exists(branch):
            raise WorktreeExistsError(name, f"branch {branch} is present")

        if base is None:
            base = self.git.current_branch() or "HEAD"
        if not self.git.commit_exists(base):
            raise BaseBranchNotFoundError(base)

        self.git.add_worktree(path, branch, base)
        created = CreatedWorktree(name=name, path=path, branch=branch, base=base)
        try:
            self.git.set_config(f"branch.{branch}.{BASE_CONFIG_KEY}", base)
            if instructions is not None:
                created.instructions_path = self.write_instructions(path, instructions)
            created.gitignore_updated = self._ensure_ignored()
        except WorktreeError:
            self._discard(path, branch)
            raise
        return created

    def _ensure_ignored(self) -> bool:
        entry = self.settings.gitignore_entry
        try:
            updated = ensure_entry(self.root / ".gitignore", entry)
        except OSError as e:
            raise WorktreeError(f"could not update .gitignore: {e}") from e
        if updated:
            logger.debug("Added %s to .gitignore", entry)
        return updated

    def _discard(self, path: Path, branch: str) -> None:
        """Undo a half-finished create."""
        try:
            self.git.remove_worktree(path)
            self.git.delete_branch(branch)
        except GitCommandFailedError as e:
            logger.warning("Could not roll back worktree %s: %s", path, e)
        self._remove_empty_trees_dir()

    def write_instructions(self, worktree: Path, instructions: str) -> Path:
        """Write the task instructions file inside ``worktree``."""
        target = worktree / self.settings.instructions_file
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"{self.settings.instructions_header}\n\n{instructions}\n")
        except OSError as e:
            raise WorktreeError(f"could not write instructions to {target}: {e}") from e
        return target

    # ------------------------------------------------------------------
    # list
    # ------------------------------------------------------------------

    def base_for(self, branch: str) -> str | None:
        """Branch ``branch`` was forked from.

        Falls back to the main worktree's branch when nothing usable
        was recorded at create time.
        """
        recorded = self.git.get_config(f"branch.{branch}.{BASE_CONFIG_KEY}")
        if recorded and self.git.commit_exists(recorded):
            return recorded
        if recorded:
            logger.debug("Recorded base %s for %s no longer exists", recorded, branch)
        return self.git.current_branch()

    def list_worktrees(self) -> list[WorktreeInfo]:
        """Describe every directory under the trees directory."""
        registered = self.git.list_worktrees()
        infos = []

        for name in self.worktree_names():
            path = self.worktree_path(name)
            resolved = path.resolve()
            info = WorktreeInfo(
                name=name,
                path=path,
                registered=resolved in registered,
                branch=registered.get(resolved),
            )
            if info.branch:
                info.base = self.base_for(info.branch)
                if info.base and info.base != info.branch:
                    info.ahead, info.behind = self.git.ahead_behind(info.branch, info.base)
            infos.append(info)

        return infos

    # ------------------------------------------------------------------
    # cleanup
    # ------------------------------------------------------------------

    def cleanup(self, name: str) -> CleanupResult:
        """Remove ``.trees/<name>`` and force-delete its branch.

        A missing worktree is not an error: the result has
        ``removed=False``. A branch left behind by a worktree directory
        that was deleted by hand is still deleted. The trees directory
        itself is removed once it is empty.
        """
        self.validate_name(name)
        return self._cleanup(name)

    def cleanup_all(self) -> Iterator[CleanupResult]:
        """Clean up every worktree under the trees directory, one at a time."""
        for name in self.worktree_names():
            yield self._cleanup(name)

    def _cleanup(self, name: str) -> CleanupResult:
        path = self.worktree_path(name)
        branch = self.branch_for(name)
        result = CleanupResult(name=name, path=path, branch=branch, removed=False)

        if path.exists():
            self.git.remove_worktree(path)
            result.removed = True
        elif self.git.branch_exists(branch):
            # Directory deleted by hand; drop git's stale record so the branch can go
            self.git.prune_worktrees()
        else:
            return result

        if self.git.branch_exists(branch):
            self.git.delete_branch(branch)
            result.branch_deleted = True
        else:
            logger.debug("Branch %s already gone", branch)

        self._remove_empty_trees_dir()
        return result

    def _remove_empty_trees_dir(self) -> None:
        if self.trees_path.is_dir() and not any(self.trees_path.iterdir()):
            self.trees_path.rmdir()
