"""List command."""

import sys

from rich.markup import escape
from rich.measure import Measurement
from rich.table import Table

from ..console import console, print_error, print_warning
from ..errors import WorktreeError
from ..worktree import WorktreeManager


def run_list() -> int:
    """Show agent worktrees and return exit code."""
    try:
        manager = WorktreeManager.from_cwd()
        trees_dir = manager.settings.gitignore_entry
        if not manager.trees_path.is_dir():
            print_warning(f"{trees_dir} does not exist, no worktrees to list")
            return 0
        worktrees = manager.list_worktrees()
    except WorktreeError as e:
        print_error(str(e))
        return 1

    if not worktrees:
        print_warning(f"No worktrees found in {trees_dir}")
        return 0

    table = Table()
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Branch", style="green", no_wrap=True)
    table.add_column("Base", style="dim", no_wrap=True)
    table.add_column("Commits", no_wrap=True)

    for info in worktrees:
        table.add_row(
            escape(info.name),
            escape(info.branch_display),
            escape(info.base or "-"),
            info.status,
        )

    # Full cell values even when wider than the terminal
    table.width = Measurement.get(console, console.options.update_width(sys.maxsize), table).maximum
    console.print(table, crop=False)
    return 0
