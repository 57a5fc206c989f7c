"""Configuration loading with pydantic-settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """agent-worktree configuration.

    Values come from ``AGENT_WORKTREE_*`` environment variables or the
    shared ``~/.claude/.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="AGENT_WORKTREE_",
        env_file=Path.home() / ".claude/.env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Layout, relative to the repository root
    trees_dir: str = ".trees"
    branch_prefix: str = "agent/"

    # Task instructions, relative to the worktree root
    instructions_file: str = ".claude/CLAUDE.local.md"
    instructions_header: str = "# Task Instructions"

    @property
    def gitignore_entry(self) -> str:
        """Line that keeps the trees directory out of git."""
        return f"{self.trees_dir.strip('/')}/"


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings instance (for testing)."""
    global _settings
    _settings = None
