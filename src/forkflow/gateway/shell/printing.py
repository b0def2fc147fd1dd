"""Printing Shell wrapper for verbose output."""

from pathlib import Path

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.shell.abc import Shell
from forkflow.printing.base import PrintingBase


class PrintingShell(PrintingBase, Shell):
    """Wrapper that prints script invocations before delegating."""

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return self._wrapped.get_installed_tool_path(tool_name)

    def run_script(self, script_path: Path, *, cwd: Path) -> CommandSucceeded | CommandFailed:
        shown = script_path.relative_to(cwd) if script_path.is_relative_to(cwd) else script_path
        self._emit(self._format_command(f"./{shown}" if not shown.is_absolute() else str(shown)))
        return self._wrapped.run_script(script_path, cwd=cwd)
