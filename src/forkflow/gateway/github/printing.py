"""Printing GitHub wrapper for verbose output."""

from forkflow.core.remote_urls import fork_endpoint
from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.github.abc import GitHub
from forkflow.printing.base import PrintingBase


class PrintingGitHub(PrintingBase, GitHub):
    """Wrapper that prints the fork request before delegating.

    The echoed command never includes credentials.
    """

    def __init__(self, wrapped: GitHub, *, api_url: str, quiet: bool = False) -> None:
        super().__init__(wrapped, quiet=quiet)
        self._api_url = api_url

    def create_fork(
        self, *, upstream_owner: str, repository: str, account: str
    ) -> CommandSucceeded | CommandFailed:
        url = fork_endpoint(self._api_url, upstream_owner, repository)
        self._emit(self._format_command(f"curl --fail --request POST {url}"))
        return self._wrapped.create_fork(
            upstream_owner=upstream_owner, repository=repository, account=account
        )
