"""Fake Shell implementation for testing."""

from pathlib import Path

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.shell.abc import Shell


class FakeShell(Shell):
    """In-memory fake with configured tools.

    This class has NO public setup methods. All state is provided via constructor.

    Constructor Injection:
    - installed_tools: Mapping of tool name -> path
    - run_script_error: CommandFailed to return from run_script()

    Mutation Tracking:
    - scripts_run: (script_path, cwd) tuples
    """

    def __init__(
        self,
        *,
        installed_tools: dict[str, str] | None = None,
        run_script_error: CommandFailed | None = None,
    ) -> None:
        self._installed_tools = installed_tools or {}
        self._run_script_error = run_script_error
        self._scripts_run: list[tuple[Path, Path]] = []

    def get_installed_tool_path(self, tool_name: str) -> str | None:
        return self._installed_tools.get(tool_name)

    def run_script(self, script_path: Path, *, cwd: Path) -> CommandSucceeded | CommandFailed:
        self._scripts_run.append((script_path, cwd))
        if self._run_script_error is not None:
            return self._run_script_error
        return CommandSucceeded()

    @property
    def scripts_run(self) -> list[tuple[Path, Path]]:
        return list(self._scripts_run)
