"""Production Shell implementation."""

import shutil
from pathlib import Path

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.shell.abc import Shell
from forkflow.subprocess_utils import run_subprocess_with_context


class RealShell(Shell):
    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return shutil.which(tool_name)

    def run_script(self, script_path: Path, *, cwd: Path) -> CommandSucceeded | CommandFailed:
        try:
            run_subprocess_with_context(
                cmd=[str(script_path)],
                operation_context=f"run {script_path.name}",
                cwd=cwd,
                capture_output=False,
            )
        except RuntimeError as e:
            return CommandFailed(message=str(e))
        return CommandSucceeded()
