"""Production GitHub implementation that POSTs with curl."""

import os

from forkflow.core.remote_urls import fork_endpoint
from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.github.abc import GitHub
from forkflow.subprocess_utils import run_subprocess_with_context


class RealGitHub(GitHub):
    """Production implementation using curl.

    Authentication is ambient: a token from the environment when one is
    configured, otherwise ``curl --user`` prompts for the account's password
    or personal access token.
    """

    def __init__(self, *, api_url: str, token: str | None) -> None:
        self._api_url = api_url
        self._token = token

    def create_fork(
        self, *, upstream_owner: str, repository: str, account: str
    ) -> CommandSucceeded | CommandFailed:
        url = fork_endpoint(self._api_url, upstream_owner, repository)
        cmd = [
            "curl",
            "--fail",
            "--silent",
            "--show-error",
            "--output",
            os.devnull,
            "--request",
            "POST",
            "--header",
            "Accept: application/vnd.github+json",
        ]
        if self._token:
            cmd.extend(["--header", f"Authorization: token {self._token}"])
        else:
            cmd.extend(["--user", account])
        cmd.append(url)

        try:
            run_subprocess_with_context(
                cmd=cmd,
                operation_context=f"create fork of {upstream_owner}/{repository}",
                capture_output=False,
            )
        except RuntimeError as e:
            return CommandFailed(message=str(e))
        return CommandSucceeded()
