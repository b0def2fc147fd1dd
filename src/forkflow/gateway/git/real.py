"""Production implementation of Git using subprocess."""

import logging
import os
from pathlib import Path

from forkflow.gateway.git.abc import Git
from forkflow.gateway.git.types import (
    CommandFailed,
    CommandSucceeded,
    Existence,
    QueryFailed,
    RemoteAlreadyExists,
    RemoteNotFound,
)
from forkflow.subprocess_utils import run_subprocess_query, run_subprocess_with_context

logger = logging.getLogger(__name__)

# Phrases hosts print when a repository does not exist. With terminal prompts
# disabled, an anonymous https probe of a missing GitHub repository fails on
# the credential prompt instead of reporting "not found".
_MISSING_REPOSITORY_MARKERS = (
    "repository not found",
    "could not be found",
    "does not exist",
    "terminal prompts disabled",
)


def classify_ls_remote_failure(stderr: str) -> Existence | QueryFailed:
    """Decide whether a failed ``git ls-remote`` means the repository is missing."""
    lowered = stderr.lower()
    if any(marker in lowered for marker in _MISSING_REPOSITORY_MARKERS):
        return Existence.ABSENT
    return QueryFailed(message=stderr.strip() or "git ls-remote failed")


def _probe_env() -> dict[str, str]:
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


class RealGit(Git):
    """Production implementation using subprocess."""

    def path_exists(self, path: Path) -> bool:
        return path.exists()

    def probe_remote(self, cwd: Path, url: str) -> Existence | QueryFailed:
        """Probe a remote with ``git ls-remote`` without prompting for credentials."""
        result = run_subprocess_query(
            cmd=["git", "ls-remote", "--heads", url], cwd=cwd, env=_probe_env()
        )
        if result.returncode == 0:
            return Existence.EXISTS
        outcome = classify_ls_remote_failure(result.stderr)
        logger.debug("ls-remote %s failed, classified as %s", url, outcome)
        return outcome

    def get_remote_url(self, repo_root: Path, remote: str) -> str | RemoteNotFound | QueryFailed:
        result = run_subprocess_query(cmd=["git", "remote", "get-url", remote], cwd=repo_root)
        if result.returncode == 0:
            url = result.stdout.strip()
            if not url:
                return RemoteNotFound(remote=remote)
            return url
        if "no such remote" in result.stderr.lower():
            return RemoteNotFound(remote=remote)
        return QueryFailed(message=result.stderr.strip())

    def list_remotes(self, repo_root: Path) -> str | CommandFailed:
        try:
            result = run_subprocess_with_context(
                cmd=["git", "remote", "-v"],
                operation_context="list remotes",
                cwd=repo_root,
            )
        except RuntimeError as e:
            return CommandFailed(message=str(e))
        return result.stdout.rstrip()

    def local_branch_exists(self, repo_root: Path, branch: str) -> Existence | QueryFailed:
        result = run_subprocess_query(
            cmd=["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=repo_root,
        )
        if result.returncode == 0:
            return Existence.EXISTS
        if result.returncode == 1:
            return Existence.ABSENT
        return QueryFailed(message=result.stderr.strip() or f"git show-ref exited {result.returncode}")

    def clone(self, cwd: Path, url: str, destination: Path) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "clone", url, str(destination)],
            operation_context=f"clone '{url}' into '{destination}'",
            cwd=cwd,
        )

    def add_remote(
        self, repo_root: Path, name: str, url: str
    ) -> CommandSucceeded | RemoteAlreadyExists | CommandFailed:
        result = run_subprocess_query(cmd=["git", "remote", "add", name, url], cwd=repo_root)
        if result.returncode == 0:
            return CommandSucceeded()
        if "already exists" in result.stderr:
            return RemoteAlreadyExists(remote=name)
        return CommandFailed(
            message=f"Failed to add remote '{name}' ({url})\n{result.stderr.strip()}".rstrip()
        )

    def fetch_remote(self, repo_root: Path, remote: str) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "fetch", remote],
            operation_context=f"fetch remote '{remote}'",
            cwd=repo_root,
        )

    def checkout_branch(self, repo_root: Path, branch: str) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "checkout", branch],
            operation_context=f"checkout branch '{branch}'",
            cwd=repo_root,
        )

    def create_and_checkout_branch(
        self, repo_root: Path, branch: str
    ) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "checkout", "-b", branch],
            operation_context=f"create branch '{branch}'",
            cwd=repo_root,
        )

    def merge_no_edit(self, repo_root: Path, ref: str) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "merge", "--no-edit", ref],
            operation_context=f"merge '{ref}'",
            cwd=repo_root,
        )

    def abort_merge(self, repo_root: Path) -> CommandSucceeded | CommandFailed:
        return _run_mutation(
            ["git", "merge", "--abort"],
            operation_context="abort merge",
            cwd=repo_root,
        )

    def push_to_remote(
        self, repo_root: Path, remote: str, branch: str, *, set_upstream: bool
    ) -> CommandSucceeded | CommandFailed:
        cmd = ["git", "push"]
        if set_upstream:
            cmd.append("--set-upstream")
        cmd.extend([remote, branch])
        return _run_mutation(
            cmd,
            operation_context=f"push branch '{branch}' to remote '{remote}'",
            cwd=repo_root,
        )


def _run_mutation(
    cmd: list[str], *, operation_context: str, cwd: Path
) -> CommandSucceeded | CommandFailed:
    # Mutations inherit the terminal so progress and credential prompts stay visible.
    try:
        run_subprocess_with_context(
            cmd=cmd,
            operation_context=operation_context,
            cwd=cwd,
            capture_output=False,
        )
    except RuntimeError as e:
        return CommandFailed(message=str(e))
    return CommandSucceeded()
