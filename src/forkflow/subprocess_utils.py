"""Subprocess helpers shared by the real gateway implementations."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


def run_subprocess_with_context(
    *,
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    capture_output: bool = True,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command from an argument list and fail with a descriptive error.

    Commands are never passed through a shell, so account, repository and
    branch names reach the tool verbatim.

    Args:
        cmd: Program and arguments
        operation_context: Human-readable description used in the error message,
            e.g. "clone 'git@github.com:alice/mylib.git'"
        cwd: Working directory for the command
        capture_output: When False the command inherits the terminal, so
            progress output and credential prompts reach the user
        env: Environment for the child process (defaults to the current one)

    Returns:
        The completed process (stdout/stderr are None when not captured)

    Raises:
        RuntimeError: If the program is missing, cannot be executed or exits non-zero
    """
    logger.debug("Running %s (cwd=%s)", list(cmd), cwd)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=capture_output,
            text=True,
            check=False,
            env=env,
        )
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to {operation_context}: {cmd[0]} not found") from e
    except OSError as e:
        # Not executable, or no interpreter line
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e

    logger.debug("%s exited with status %d", cmd[0], result.returncode)
    if result.returncode != 0:
        message = f"Failed to {operation_context} (exit status {result.returncode})"
        stderr = (result.stderr or "").strip()
        if stderr:
            message = f"{message}\n{stderr}"
        raise RuntimeError(message)
    return result


def run_subprocess_query(
    *,
    cmd: Sequence[str],
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a read-only command and return the result whatever its exit status.

    Used for probes whose exit status and stderr carry the answer. A missing
    program is reported as exit status 127 and one that cannot be executed as
    126, the way a shell would.
    """
    logger.debug("Querying %s (cwd=%s)", list(cmd), cwd)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
            env=env,
        )
    except FileNotFoundError:
        return subprocess.CompletedProcess(list(cmd), 127, "", f"{cmd[0]}: command not found")
    except OSError as e:
        return subprocess.CompletedProcess(list(cmd), 126, "", f"{cmd[0]}: {e}")
    logger.debug("%s exited with status %d", cmd[0], result.returncode)
    return result
