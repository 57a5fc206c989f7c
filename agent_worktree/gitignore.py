"""Idempotent .gitignore editing."""

from pathlib import Path


def _equivalent_lines(entry: str) -> set[str]:
    """Spellings of ``entry`` that git treats the same for a directory."""
    bare = entry.strip("/")
    return {bare, f"{bare}/", f"/{bare}", f"/{bare}/"}


def has_entry(content: str, entry: str) -> bool:
    """Check whether ``content`` already ignores ``entry``."""
    wanted = _equivalent_lines(entry)
    return any(line.strip() in wanted for line in content.splitlines())


def ensure_entry(gitignore: Path, entry: str) -> bool:
    """Append ``entry`` to ``gitignore`` unless it is already there.

    Creates the file if missing. Existing content is preserved; a
    newline is inserted first when the file does not end with one.

    Returns:
        True if the file was written.
    """
    content = ""
    if gitignore.exists():
        content = gitignore.read_text()
        if has_entry(content, entry):
            return False
        if content and not content.endswith("\n"):
            content += "\n"

    gitignore.write_text(f"{content}{entry}\n")
    return True
