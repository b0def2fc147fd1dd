"""Tests for the sync_primary_branch pipeline step."""

from pathlib import Path

from forkflow.core.context import context_for_test
from forkflow.core.setup_pipeline import SYNC_FORK_DOCS_URL, SetupError, sync_primary_branch
from forkflow.gateway.git.fake import FakeGit, PushedBranch
from forkflow.gateway.git.types import CommandFailed
from tests.test_utils.setup_state import make_state


def test_fresh_fork_is_not_synchronized(tmp_path: Path) -> None:
    git = FakeGit()
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = sync_primary_branch(ctx, make_state(tmp_path, fork_existed=False))

    assert not isinstance(result, SetupError)
    assert git.operation_log == []


def test_clean_merge_is_pushed_to_fork(tmp_path: Path) -> None:
    git = FakeGit()
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = sync_primary_branch(ctx, make_state(tmp_path, fork_existed=True))

    assert not isinstance(result, SetupError)
    assert git.operation_log == [
        "fetch upstream-org",
        "checkout master",
        "merge upstream-org/master",
        "push origin master",
    ]
    assert git.pushed_branches == [
        PushedBranch(remote="origin", branch="master", set_upstream=False)
    ]


def test_conflicting_merge_is_aborted_and_fatal(tmp_path: Path) -> None:
    git = FakeGit(merge_conflicts={"upstream-org/master"})
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = sync_primary_branch(ctx, make_state(tmp_path, fork_existed=True))

    assert isinstance(result, SetupError)
    assert result.error_type == "primary-branch-diverged"
    assert SYNC_FORK_DOCS_URL in result.message
    assert git.aborted_merges == [tmp_path]
    assert git.pushed_branches == []


def test_fetch_failure_stops_before_merge(tmp_path: Path) -> None:
    git = FakeGit(fetch_error=CommandFailed(message="could not resolve host"))
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = sync_primary_branch(ctx, make_state(tmp_path, fork_existed=True))

    assert isinstance(result, SetupError)
    assert result.error_type == "fetch-failed"
    assert git.merged_refs == []


def test_push_failure_is_reported(tmp_path: Path) -> None:
    git = FakeGit(push_error=CommandFailed(message="rejected"))
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = sync_primary_branch(ctx, make_state(tmp_path, fork_existed=True))

    assert isinstance(result, SetupError)
    assert result.error_type == "push-failed"
