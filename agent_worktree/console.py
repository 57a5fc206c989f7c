"""Console output and logging using rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Global console instances
console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)


def setup_logging(verbose: bool = False) -> None:
    """Route ``agent_worktree`` loggers to stderr through rich.

    Warnings only by default; ``verbose`` turns on debug output, which
    includes every git command that runs.
    """
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("agent_worktree")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {escape(message)}")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{escape(message)}[/yellow]")


def print_error(message: str) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
