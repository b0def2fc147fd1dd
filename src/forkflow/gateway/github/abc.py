"""Abstract interface for GitHub fork operations."""

from abc import ABC, abstractmethod

from forkflow.gateway.git.types import CommandFailed, CommandSucceeded


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real, fake, printing) must implement this interface.
    """

    @abstractmethod
    def create_fork(
        self, *, upstream_owner: str, repository: str, account: str
    ) -> CommandSucceeded | CommandFailed:
        """Ask GitHub to fork ``upstream_owner/repository`` into ``account``.

        Only the HTTP status is checked; GitHub creates forks asynchronously.
        """
        ...
