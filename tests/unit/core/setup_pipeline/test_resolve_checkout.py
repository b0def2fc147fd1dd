"""Tests for the resolve_checkout and run_post_clone_setup pipeline steps."""

from pathlib import Path

from forkflow.core.context import context_for_test
from forkflow.core.setup_pipeline import SetupError, resolve_checkout, run_post_clone_setup
from forkflow.gateway.git.fake import FakeGit
from forkflow.gateway.git.types import CommandFailed
from forkflow.gateway.shell.fake import FakeShell
from tests.test_utils.setup_state import FORK_URL, make_state


def test_matching_checkout_is_reused(tmp_path: Path) -> None:
    git = FakeGit(
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): FORK_URL},
    )
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert result.cloned is False
    assert result.workspace == tmp_path
    assert git.cloned_repos == []


def test_clones_into_repository_branch_directory(tmp_path: Path) -> None:
    git = FakeGit()
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert result.cloned is True
    assert result.workspace == tmp_path / "mylib-feature-x"
    assert git.cloned_repos == [(FORK_URL, tmp_path / "mylib-feature-x")]


def test_checkout_of_another_repository_is_not_reused(tmp_path: Path) -> None:
    git = FakeGit(
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): "git@github.com:alice/otherlib.git"},
    )
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert result.cloned is True
    assert len(git.cloned_repos) == 1


def test_repository_without_origin_is_not_reused(tmp_path: Path) -> None:
    git = FakeGit(existing_paths={tmp_path / ".git"})
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert result.cloned is True


def test_origin_query_failure_is_fatal(tmp_path: Path) -> None:
    git = FakeGit(existing_paths={tmp_path / ".git"}, remote_url_failures={tmp_path})
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert isinstance(result, SetupError)
    assert result.error_type == "origin-query-failed"
    assert git.cloned_repos == []


def test_clone_failure_is_reported(tmp_path: Path) -> None:
    git = FakeGit(clone_error=CommandFailed(message="destination path already exists"))
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = resolve_checkout(ctx, make_state(tmp_path))

    assert isinstance(result, SetupError)
    assert result.error_type == "clone-failed"


def test_post_clone_script_runs_when_present(tmp_path: Path) -> None:
    script = tmp_path / "scripts" / "post-clone-setup.sh"
    shell = FakeShell(installed_tools={"curl": "/usr/bin/curl"})
    ctx = context_for_test(git=FakeGit(existing_paths={script}), shell=shell, cwd=tmp_path)

    result = run_post_clone_setup(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert shell.scripts_run == [(script, tmp_path)]


def test_post_clone_script_skipped_when_absent(tmp_path: Path) -> None:
    shell = FakeShell()
    ctx = context_for_test(git=FakeGit(), shell=shell, cwd=tmp_path)

    result = run_post_clone_setup(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert shell.scripts_run == []


def test_post_clone_script_failure_is_fatal(tmp_path: Path) -> None:
    script = tmp_path / "scripts" / "post-clone-setup.sh"
    shell = FakeShell(run_script_error=CommandFailed(message="exit status 2"))
    ctx = context_for_test(git=FakeGit(existing_paths={script}), shell=shell, cwd=tmp_path)

    result = run_post_clone_setup(ctx, make_state(tmp_path))

    assert isinstance(result, SetupError)
    assert result.error_type == "post-clone-setup-failed"
