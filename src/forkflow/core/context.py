"""Application context with dependency injection."""

import os
from dataclasses import dataclass
from pathlib import Path

import click

from forkflow.cli.config import LoadedConfig
from forkflow.gateway.git.abc import Git
from forkflow.gateway.git.printing import PrintingGit
from forkflow.gateway.git.real import RealGit
from forkflow.gateway.github.abc import GitHub
from forkflow.gateway.github.printing import PrintingGitHub
from forkflow.gateway.github.real import RealGitHub
from forkflow.gateway.shell.abc import Shell
from forkflow.gateway.shell.printing import PrintingShell
from forkflow.gateway.shell.real import RealShell
from forkflow.output import user_output

GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass(frozen=True)
class ForkflowContext:
    """Immutable context holding all dependencies for a forkflow run.

    Created at CLI entry point and threaded through the application.
    Frozen to prevent accidental modification at runtime.
    """

    git: Git
    github: GitHub
    shell: Shell
    cwd: Path  # Current working directory at CLI invocation
    config: LoadedConfig


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        cwd_path = Path.cwd()
        return (cwd_path, None)
    except (FileNotFoundError, OSError):
        return (
            None,
            "Current working directory no longer exists",
        )


def create_context(*, config: LoadedConfig) -> ForkflowContext:
    """Create production context with real implementations.

    Every gateway is wrapped in its printing counterpart so each mutating
    command is echoed before it runs.
    """
    cwd_result, error_msg = safe_cwd()
    if cwd_result is None:
        assert error_msg is not None
        user_output(click.style("Error: ", fg="red") + error_msg)
        user_output("\nThe directory you're running from has been deleted.")
        user_output("Please change to a valid directory and try again.")
        raise SystemExit(1)

    token = os.environ.get(GITHUB_TOKEN_ENV_VAR) or None
    github = RealGitHub(api_url=config.api_url, token=token)

    return ForkflowContext(
        git=PrintingGit(RealGit()),
        github=PrintingGitHub(github, api_url=config.api_url),
        shell=PrintingShell(RealShell()),
        cwd=cwd_result,
        config=config,
    )


def context_for_test(
    *,
    git: Git | None = None,
    github: GitHub | None = None,
    shell: Shell | None = None,
    cwd: Path | None = None,
    config: LoadedConfig | None = None,
) -> ForkflowContext:
    """Create test context with fakes for any unspecified dependency.

    The default config names ``upstream-org`` as the upstream owner, and the
    default shell has curl installed.

    Example:
        >>> git = FakeGit(reachable_urls={"git@github.com:alice/mylib.git"})
        >>> ctx = context_for_test(git=git, cwd=tmp_path)
    """
    from forkflow.gateway.git.fake import FakeGit
    from forkflow.gateway.github.fake import FakeGitHub
    from forkflow.gateway.shell.fake import FakeShell

    if git is None:
        git = FakeGit()
    if github is None:
        github = FakeGitHub()
    if shell is None:
        shell = FakeShell(installed_tools={"curl": "/usr/bin/curl"})
    if config is None:
        config = LoadedConfig.defaults().with_overrides(
            upstream_owner="upstream-org", primary_branch=None
        )

    return ForkflowContext(
        git=git,
        github=github,
        shell=shell,
        cwd=cwd if cwd is not None else Path("/test/default/cwd"),
        config=config,
    )
