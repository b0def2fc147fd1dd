"""Remote URL construction for forks and their upstream repositories."""

from dataclasses import dataclass
from enum import Enum


class AuthScheme(Enum):
    """How git talks to the host.

    SSH uses key-based ``git@host:owner/repo.git`` addresses; HTTPS uses web
    addresses and whatever credential helper git is configured with.
    """

    SSH = "ssh"
    HTTPS = "https"

    @classmethod
    def from_argument(cls, value: str) -> "AuthScheme":
        # Only the literal "ssh" selects key-based URLs; anything else is a web address.
        if value == cls.SSH.value:
            return cls.SSH
        return cls.HTTPS


@dataclass(frozen=True)
class InvocationParams:
    """The four positional arguments, bound once at startup."""

    auth: AuthScheme
    account: str
    repository: str
    branch: str


def repository_url(auth: AuthScheme, *, host: str, owner: str, repository: str) -> str:
    """Build the git URL for ``owner/repository`` on ``host``.

    >>> repository_url(AuthScheme.SSH, host="github.com", owner="alice", repository="mylib")
    'git@github.com:alice/mylib.git'
    >>> repository_url(AuthScheme.HTTPS, host="github.com", owner="alice", repository="mylib")
    'https://github.com/alice/mylib.git'
    """
    if auth is AuthScheme.SSH:
        return f"git@{host}:{owner}/{repository}.git"
    return f"https://{host}/{owner}/{repository}.git"


def fork_url(params: InvocationParams, *, host: str) -> str:
    return repository_url(params.auth, host=host, owner=params.account, repository=params.repository)


def upstream_url(params: InvocationParams, *, host: str, upstream_owner: str) -> str:
    return repository_url(
        params.auth, host=host, owner=upstream_owner, repository=params.repository
    )


def fork_endpoint(api_url: str, upstream_owner: str, repository: str) -> str:
    """URL of the REST endpoint that forks ``upstream_owner/repository``."""
    return f"{api_url.rstrip('/')}/repos/{upstream_owner}/{repository}/forks"


def clone_directory_name(params: InvocationParams) -> str:
    return f"{params.repository}-{params.branch}"
