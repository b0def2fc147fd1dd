"""Printing Git wrapper for verbose output."""

import shlex
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
from forkflow.printing.base import PrintingBase


class PrintingGit(PrintingBase, Git):
    """Wrapper that prints the fork probe and mutating git commands before delegating.

    Usage:
        printing_git = PrintingGit(RealGit())
    """

    # Read-only: delegate without printing
    def path_exists(self, path: Path) -> bool:
        return self._wrapped.path_exists(path)

    def get_remote_url(self, repo_root: Path, remote: str) -> str | RemoteNotFound | QueryFailed:
        return self._wrapped.get_remote_url(repo_root, remote)

    def local_branch_exists(self, repo_root: Path, branch: str) -> Existence | QueryFailed:
        return self._wrapped.local_branch_exists(repo_root, branch)

    # Fork probe: print then delegate
    def probe_remote(self, cwd: Path, url: str) -> Existence | QueryFailed:
        self._emit(self._format_command(shlex.join(["git", "ls-remote", "--heads", url])))
        return self._wrapped.probe_remote(cwd, url)

    # Write operations: print then delegate
    def list_remotes(self, repo_root: Path) -> str | CommandFailed:
        self._emit(self._format_command("git remote -v"))
        return self._wrapped.list_remotes(repo_root)

    def clone(self, cwd: Path, url: str, destination: Path) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "clone", url, destination.name])))
        return self._wrapped.clone(cwd, url, destination)

    def add_remote(
        self, repo_root: Path, name: str, url: str
    ) -> CommandSucceeded | RemoteAlreadyExists | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "remote", "add", name, url])))
        return self._wrapped.add_remote(repo_root, name, url)

    def fetch_remote(self, repo_root: Path, remote: str) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "fetch", remote])))
        return self._wrapped.fetch_remote(repo_root, remote)

    def checkout_branch(self, repo_root: Path, branch: str) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "checkout", branch])))
        return self._wrapped.checkout_branch(repo_root, branch)

    def create_and_checkout_branch(
        self, repo_root: Path, branch: str
    ) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "checkout", "-b", branch])))
        return self._wrapped.create_and_checkout_branch(repo_root, branch)

    def merge_no_edit(self, repo_root: Path, ref: str) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command(shlex.join(["git", "merge", "--no-edit", ref])))
        return self._wrapped.merge_no_edit(repo_root, ref)

    def abort_merge(self, repo_root: Path) -> CommandSucceeded | CommandFailed:
        self._emit(self._format_command("git merge --abort"))
        return self._wrapped.abort_merge(repo_root)

    def push_to_remote(
        self, repo_root: Path, remote: str, branch: str, *, set_upstream: bool
    ) -> CommandSucceeded | CommandFailed:
        upstream_flag = ["--set-upstream"] if set_upstream else []
        self._emit(self._format_command(shlex.join(["git", "push", *upstream_flag, remote, branch])))
        return self._wrapped.push_to_remote(repo_root, remote, branch, set_upstream=set_upstream)
