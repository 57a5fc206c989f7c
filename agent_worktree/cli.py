"""CLI definition with typer."""

from typing import Annotated

import click
import typer
from typer.core import TyperGroup

from . import __version__
from .config import get_settings
from .console import console, setup_logging

USAGE = """\
Usage: agent-worktree [--verbose] <command> [args]

Manage git worktrees for parallel coding-agent sessions. Each worktree
lives in {trees}/<name> on its own branch {prefix}<name>.

Commands:
  agent-worktree create <name> [base-branch] [--instructions TEXT]
      Create {trees}/<name> on a new branch {prefix}<name> forked from
      base-branch (default: the current branch). With --instructions,
      write the text to {instructions} inside the worktree.
  agent-worktree list
      Show each worktree, its branch and commits ahead/behind its base.
  agent-worktree cleanup <name>
      Remove a worktree and delete its branch, discarding unmerged work.
  agent-worktree cleanup-all
      Clean up every worktree under {trees}/.
  agent-worktree help
      Show this message.

Options:
  -v, --verbose   Log every git command
  --version       Show version and exit
"""


class StrictGroup(TyperGroup):
    """Group where every usage error exits with status 1."""

    def make_context(self, info_name, args, parent=None, **extra):
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except click.UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except click.UsageError as e:
            e.exit_code = 1
            raise


app = typer.Typer(
    cls=StrictGroup,
    help="Manage git worktrees for parallel coding-agent sessions.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def print_usage() -> None:
    """Print the command overview."""
    settings = get_settings()
    console.print(
        USAGE.format(
            trees=settings.trees_dir,
            prefix=settings.branch_prefix,
            instructions=settings.instructions_file,
        ),
        markup=False,
    )


def version_callback(value: bool) -> None:
    if value:
        console.print(f"agent-worktree {__version__}", markup=False)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="Log every git command")
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
):
    """Manage git worktrees for parallel coding-agent sessions."""
    setup_logging(verbose)

    # Show usage if no command provided
    if ctx.invoked_subcommand is None:
        print_usage()


@app.command()
def create(
    name: Annotated[str, typer.Argument(help="Worktree name; the branch is agent/NAME")],
    base_branch: Annotated[
        str | None,
        typer.Argument(help="Branch to fork from (default: current branch)"),
    ] = None,
    instructions: Annotated[
        str | None,
        typer.Option("-i", "--instructions", help="Task instructions for the agent"),
    ] = None,
):
    """Create a worktree on a new agent branch."""
    from .commands.create import run_create

    raise typer.Exit(run_create(name, base_branch, instructions))


@app.command("list")
def list_worktrees():
    """List worktrees with commits ahead/behind their base."""
    from .commands.list import run_list

    raise typer.Exit(run_list())


@app.command()
def cleanup(
    name: Annotated[str, typer.Argument(help="Worktree name")],
):
    """Remove a worktree and force-delete its branch."""
    from .commands.cleanup import run_cleanup

    raise typer.Exit(run_cleanup(name))


@app.command("cleanup-all")
def cleanup_all():
    """Remove every worktree and its branch."""
    from .commands.cleanup import run_cleanup_all

    raise typer.Exit(run_cleanup_all())


@app.command("help")
def help_command():
    """Show the command overview."""
    print_usage()


def main():
    """Entry point."""
    app()
