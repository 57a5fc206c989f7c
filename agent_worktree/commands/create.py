"""Create command."""

import os
from pathlib import Path

from rich.markup import escape

from ..console import console, print_error, print_success
from ..errors import WorktreeError
from ..worktree import WorktreeManager


def _display_path(path: Path) -> str:
    """Path relative to the current directory, for cd hints."""
    return os.path.relpath(path, Path.cwd().resolve())


def run_create(name: str, base: str | None = None, instructions: str | None = None) -> int:
    """Create a worktree and return exit code."""
    try:
        manager = WorktreeManager.from_cwd()
        created = manager.create(name, base, instructions)
    except WorktreeError as e:
        print_error(str(e))
        return 1

    relative = created.path.relative_to(manager.root)
    if created.gitignore_updated:
        print_success(f"Added {manager.settings.gitignore_entry} to .gitignore")
    print_success(f"Created worktree {relative} on branch {created.branch} (from {created.base})")
    if created.instructions_path:
        instructions_path = created.instructions_path.relative_to(manager.root)
        print_success(f"Wrote task instructions to {instructions_path}")

    console.print()
    console.print("To start working:")
    console.print(f"  [cyan]cd {escape(_display_path(created.path))}[/cyan]")
    return 0
