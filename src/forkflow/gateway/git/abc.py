"""Abstract base class for the git operations forkflow needs.

Every method takes the directory it operates in explicitly; implementations
never rely on the process working directory.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from forkflow.gateway.git.types import (
    CommandFailed,
    CommandSucceeded,
    Existence,
    QueryFailed,
    RemoteAlreadyExists,
    RemoteNotFound,
)


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real, fake, printing) must implement this interface.
    """

    # ============================================================================
    # Query Operations
    # ============================================================================

    @abstractmethod
    def path_exists(self, path: Path) -> bool:
        """Check if a path exists on the filesystem."""
        ...

    @abstractmethod
    def probe_remote(self, cwd: Path, url: str) -> Existence | QueryFailed:
        """Check whether a remote repository URL can be listed.

        Command: git ls-remote <url>

        Returns:
            Existence.EXISTS if the repository answered, Existence.ABSENT if the
            host reported it does not exist, QueryFailed for anything else
            (authentication, network).
        """
        ...

    @abstractmethod
    def get_remote_url(self, repo_root: Path, remote: str) -> str | RemoteNotFound | QueryFailed:
        """Get the URL configured for a remote."""
        ...

    @abstractmethod
    def list_remotes(self, repo_root: Path) -> str | CommandFailed:
        """Return the verbose remote listing (``git remote -v``)."""
        ...

    @abstractmethod
    def local_branch_exists(self, repo_root: Path, branch: str) -> Existence | QueryFailed:
        """Check whether refs/heads/<branch> exists."""
        ...

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    @abstractmethod
    def clone(self, cwd: Path, url: str, destination: Path) -> CommandSucceeded | CommandFailed:
        """Clone ``url`` into ``destination``."""
        ...

    @abstractmethod
    def add_remote(
        self, repo_root: Path, name: str, url: str
    ) -> CommandSucceeded | RemoteAlreadyExists | CommandFailed:
        """Add a remote, reporting an existing remote of that name separately."""
        ...

    @abstractmethod
    def fetch_remote(self, repo_root: Path, remote: str) -> CommandSucceeded | CommandFailed:
        """Fetch all branches of a remote."""
        ...

    @abstractmethod
    def checkout_branch(self, repo_root: Path, branch: str) -> CommandSucceeded | CommandFailed:
        """Switch to an existing local branch."""
        ...

    @abstractmethod
    def create_and_checkout_branch(
        self, repo_root: Path, branch: str
    ) -> CommandSucceeded | CommandFailed:
        """Create a branch at HEAD and switch to it (``git checkout -b``)."""
        ...

    @abstractmethod
    def merge_no_edit(self, repo_root: Path, ref: str) -> CommandSucceeded | CommandFailed:
        """Merge ``ref`` into the current branch without opening an editor."""
        ...

    @abstractmethod
    def abort_merge(self, repo_root: Path) -> CommandSucceeded | CommandFailed:
        """Abort an in-progress merge, restoring the pre-merge state."""
        ...

    @abstractmethod
    def push_to_remote(
        self, repo_root: Path, remote: str, branch: str, *, set_upstream: bool
    ) -> CommandSucceeded | CommandFailed:
        """Push a branch to a remote.

        Args:
            repo_root: Path to the git repository root
            remote: Remote name (e.g., "origin")
            branch: Branch name to push
            set_upstream: If True, set upstream tracking (--set-upstream)
        """
        ...
