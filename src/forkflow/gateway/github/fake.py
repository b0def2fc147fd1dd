"""Fake GitHub implementation for testing."""

from typing import NamedTuple

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded
from forkflow.gateway.github.abc import GitHub


class CreatedFork(NamedTuple):
    upstream_owner: str
    repository: str
    account: str


class FakeGitHub(GitHub):
    """In-memory fake that records fork requests.

    Constructor Injection:
    - create_fork_error: CommandFailed to return from create_fork()

    Mutation Tracking:
    - created_forks: CreatedFork records, one per create_fork() call
    """

    def __init__(self, *, create_fork_error: CommandFailed | None = None) -> None:
        self._create_fork_error = create_fork_error
        self._created_forks: list[CreatedFork] = []

    def create_fork(
        self, *, upstream_owner: str, repository: str, account: str
    ) -> CommandSucceeded | CommandFailed:
        self._created_forks.append(
            CreatedFork(upstream_owner=upstream_owner, repository=repository, account=account)
        )
        if self._create_fork_error is not None:
            return self._create_fork_error
        return CommandSucceeded()

    @property
    def created_forks(self) -> list[CreatedFork]:
        return list(self._created_forks)
