"""Cleanup commands."""

from ..console import console, print_error, print_success, print_warning
from ..errors import WorktreeError
from ..worktree import CleanupResult, WorktreeManager


def _report(manager: WorktreeManager, result: CleanupResult) -> None:
    relative = result.path.relative_to(manager.root)
    if result.removed:
        print_success(f"Removed worktree {relative}")
    elif result.branch_deleted:
        print_warning(f"Worktree {relative} was already deleted, pruned its registration")
    else:
        print_warning(f"Worktree '{result.name}' does not exist, skipping")
        return

    if result.branch_deleted:
        print_success(f"Deleted branch {result.branch}")


def run_cleanup(name: str) -> int:
    """Remove one worktree and its branch, return exit code."""
    try:
        manager = WorktreeManager.from_cwd()
        _report(manager, manager.cleanup(name))
    except WorktreeError as e:
        print_error(str(e))
        return 1

    console.print("Cleanup complete")
    return 0


def run_cleanup_all() -> int:
    """Remove every worktree under the trees directory, return exit code."""
    try:
        manager = WorktreeManager.from_cwd()
        if not manager.trees_path.is_dir():
            print_warning(f"{manager.settings.gitignore_entry} does not exist, nothing to clean up")
            return 0
        for result in manager.cleanup_all():
            _report(manager, result)
    except WorktreeError as e:
        print_error(str(e))
        return 1

    console.print("Cleanup complete")
    return 0
