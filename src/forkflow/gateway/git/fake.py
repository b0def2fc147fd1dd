"""Fake git operations for testing.

FakeGit is an in-memory implementation that accepts pre-configured state
in its constructor. Construct instances directly with keyword arguments.
"""

from pathlib import Path
from typing import NamedTuple

from forkflow.gateway.git.abc import Git
from forkflow.gateway.git.types import (
    CommandFailed,
    CommandSucceeded,
    Existence,
    QueryFailed,
    RemoteAlreadyExists,
    RemoteNotFound,
)


class PushedBranch(NamedTuple):
    """Record of a branch push operation.

    Attributes:
        remote: Remote name (e.g., "origin")
        branch: Branch name that was pushed
        set_upstream: Whether --set-upstream was used
    """

    remote: str
    branch: str
    set_upstream: bool


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    State Management:
    -----------------
    Clone, remote add and branch creation update internal state, so later
    queries in the same test observe them (a cloned directory exists and has
    an origin, a created branch exists).

    Constructor Injection:
    ---------------------
    - existing_paths: Paths that exist on the simulated filesystem
    - remote_urls: Mapping of (repo_root, remote_name) -> remote URL
    - reachable_urls: URLs that ``probe_remote`` reports as existing
    - probe_failures: URL -> message for probes that cannot be answered
    - local_branches: Mapping of repo_root -> local branch names
    - merge_conflicts: Refs whose merge fails
    - *_error: CommandFailed to return from the matching mutation

    Mutation Tracking:
    -----------------
    - cloned_repos: (url, destination) tuples
    - added_remotes: (repo_root, name, url) tuples
    - fetched_remotes: remote names
    - checked_out_branches: (repo_root, branch) tuples
    - created_branches: (repo_root, branch) tuples
    - merged_refs: (repo_root, ref) tuples
    - aborted_merges: repo roots
    - pushed_branches: PushedBranch records
    - operation_log: every mutation in call order, as short strings
    """

    def __init__(
        self,
        *,
        existing_paths: set[Path] | None = None,
        remote_urls: dict[tuple[Path, str], str] | None = None,
        reachable_urls: set[str] | None = None,
        probe_failures: dict[str, str] | None = None,
        local_branches: dict[Path, set[str]] | None = None,
        merge_conflicts: set[str] | None = None,
        remote_url_failures: set[Path] | None = None,
        branch_query_failures: set[Path] | None = None,
        clone_error: CommandFailed | None = None,
        add_remote_error: CommandFailed | None = None,
        fetch_error: CommandFailed | None = None,
        checkout_error: CommandFailed | None = None,
        push_error: CommandFailed | None = None,
    ) -> None:
        self._existing_paths = set(existing_paths or set())
        self._remote_urls = dict(remote_urls or {})
        self._reachable_urls = set(reachable_urls or set())
        self._probe_failures = dict(probe_failures or {})
        self._local_branches = {root: set(names) for root, names in (local_branches or {}).items()}
        self._merge_conflicts = set(merge_conflicts or set())
        self._remote_url_failures = set(remote_url_failures or set())
        self._branch_query_failures = set(branch_query_failures or set())
        self._clone_error = clone_error
        self._add_remote_error = add_remote_error
        self._fetch_error = fetch_error
        self._checkout_error = checkout_error
        self._push_error = push_error

        # Mutation tracking
        self._cloned_repos: list[tuple[str, Path]] = []
        self._added_remotes: list[tuple[Path, str, str]] = []
        self._fetched_remotes: list[str] = []
        self._checked_out_branches: list[tuple[Path, str]] = []
        self._created_branches: list[tuple[Path, str]] = []
        self._merged_refs: list[tuple[Path, str]] = []
        self._aborted_merges: list[Path] = []
        self._pushed_branches: list[PushedBranch] = []
        self._probed_urls: list[str] = []
        self._operation_log: list[str] = []

    # ============================================================================
    # Query Operations
    # ============================================================================

    def path_exists(self, path: Path) -> bool:
        return path in self._existing_paths

    def probe_remote(self, cwd: Path, url: str) -> Existence | QueryFailed:
        self._probed_urls.append(url)
        if url in self._probe_failures:
            return QueryFailed(message=self._probe_failures[url])
        if url in self._reachable_urls:
            return Existence.EXISTS
        return Existence.ABSENT

    def get_remote_url(self, repo_root: Path, remote: str) -> str | RemoteNotFound | QueryFailed:
        if repo_root in self._remote_url_failures:
            return QueryFailed(message=f"fatal: not a git repository: {repo_root}")
        url = self._remote_urls.get((repo_root, remote))
        if url is None:
            return RemoteNotFound(remote=remote)
        return url

    def list_remotes(self, repo_root: Path) -> str | CommandFailed:
        lines: list[str] = []
        for (root, name), url in sorted(self._remote_urls.items()):
            if root != repo_root:
                continue
            lines.append(f"{name}\t{url} (fetch)")
            lines.append(f"{name}\t{url} (push)")
        return "\n".join(lines)

    def local_branch_exists(self, repo_root: Path, branch: str) -> Existence | QueryFailed:
        if repo_root in self._branch_query_failures:
            return QueryFailed(message=f"fatal: not a git repository: {repo_root}")
        if branch in self._local_branches.get(repo_root, set()):
            return Existence.EXISTS
        return Existence.ABSENT

    # ============================================================================
    # Mutation Operations
    # ============================================================================

    def clone(self, cwd: Path, url: str, destination: Path) -> CommandSucceeded | CommandFailed:
        self._operation_log.append(f"clone {url} {destination}")
        if self._clone_error is not None:
            return self._clone_error
        self._cloned_repos.append((url, destination))
        self._existing_paths.add(destination)
        self._existing_paths.add(destination / ".git")
        self._remote_urls[(destination, "origin")] = url
        return CommandSucceeded()

    def add_remote(
        self, repo_root: Path, name: str, url: str
    ) -> CommandSucceeded | RemoteAlreadyExists | CommandFailed:
        self._operation_log.append(f"remote add {name} {url}")
        if self._add_remote_error is not None:
            return self._add_remote_error
        if (repo_root, name) in self._remote_urls:
            return RemoteAlreadyExists(remote=name)
        self._added_remotes.append((repo_root, name, url))
        self._remote_urls[(repo_root, name)] = url
        return CommandSucceeded()

    def fetch_remote(self, repo_root: Path, remote: str) -> CommandSucceeded | CommandFailed:
        self._operation_log.append(f"fetch {remote}")
        if self._fetch_error is not None:
            return self._fetch_error
        self._fetched_remotes.append(remote)
        return CommandSucceeded()

    def checkout_branch(self, repo_root: Path, branch: str) -> CommandSucceeded | CommandFailed:
        self._operation_log.append(f"checkout {branch}")
        if self._checkout_error is not None:
            return self._checkout_error
        self._checked_out_branches.append((repo_root, branch))
        return CommandSucceeded()

    def create_and_checkout_branch(
        self, repo_root: Path, branch: str
    ) -> CommandSucceeded | CommandFailed:
        self._operation_log.append(f"checkout -b {branch}")
        if branch in self._local_branches.get(repo_root, set()):
            return CommandFailed(message=f"fatal: a branch named '{branch}' already exists")
        self._created_branches.append((repo_root, branch))
        self._local_branches.setdefault(repo_root, set()).add(branch)
        return CommandSucceeded()

    def merge_no_edit(self, repo_root: Path, ref: str) -> CommandSucceeded | CommandFailed:
        self._operation_log.append(f"merge {ref}")
        self._merged_refs.append((repo_root, ref))
        if ref in self._merge_conflicts:
            return CommandFailed(message=f"Automatic merge of '{ref}' failed; fix conflicts")
        return CommandSucceeded()

    def abort_merge(self, repo_root: Path) -> CommandSucceeded | CommandFailed:
        self._operation_log.append("merge --abort")
        self._aborted_merges.append(repo_root)
        return CommandSucceeded()

    def push_to_remote(
        self, repo_root: Path, remote: str, branch: str, *, set_upstream: bool
    ) -> CommandSucceeded | CommandFailed:
        upstream_flag = "--set-upstream " if set_upstream else ""
        self._operation_log.append(f"push {upstream_flag}{remote} {branch}")
        if self._push_error is not None:
            return self._push_error
        self._pushed_branches.append(
            PushedBranch(remote=remote, branch=branch, set_upstream=set_upstream)
        )
        return CommandSucceeded()

    # ============================================================================
    # Mutation Tracking Properties
    # ============================================================================

    @property
    def cloned_repos(self) -> list[tuple[str, Path]]:
        """Read-only access to clones, as (url, destination) tuples."""
        return list(self._cloned_repos)

    @property
    def added_remotes(self) -> list[tuple[Path, str, str]]:
        return list(self._added_remotes)

    @property
    def fetched_remotes(self) -> list[str]:
        return list(self._fetched_remotes)

    @property
    def checked_out_branches(self) -> list[tuple[Path, str]]:
        return list(self._checked_out_branches)

    @property
    def created_branches(self) -> list[tuple[Path, str]]:
        return list(self._created_branches)

    @property
    def merged_refs(self) -> list[tuple[Path, str]]:
        return list(self._merged_refs)

    @property
    def aborted_merges(self) -> list[Path]:
        return list(self._aborted_merges)

    @property
    def pushed_branches(self) -> list[PushedBranch]:
        """Read-only access to pushed branches for test assertions.

        Returns list of PushedBranch named tuples with fields:
        remote, branch, set_upstream.
        """
        return list(self._pushed_branches)

    @property
    def probed_urls(self) -> list[str]:
        return list(self._probed_urls)

    @property
    def operation_log(self) -> list[str]:
        """Every mutation attempted, in call order, including failed ones."""
        return list(self._operation_log)
