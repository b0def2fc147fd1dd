"""Abstract interface for shell-level operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded


class Shell(ABC):
    """Abstract interface for locating tools and running repository scripts."""

    @abstractmethod
    def get_installed_tool_path(self, tool_name: str) -> str | None:
        """Return the absolute path of ``tool_name`` on PATH, or None if missing."""
        ...

    @abstractmethod
    def run_script(self, script_path: Path, *, cwd: Path) -> CommandSucceeded | CommandFailed:
        """Run an executable script with no arguments."""
        ...
