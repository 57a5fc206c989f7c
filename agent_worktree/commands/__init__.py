"""Command implementations for agent-worktree.

Each ``run_*`` function prints its results and returns an exit code.
"""
