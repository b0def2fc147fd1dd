"""Tests for the configure_upstream_remote pipeline step."""

from pathlib import Path

import pytest

from forkflow.core.context import context_for_test
from forkflow.core.setup_pipeline import SetupError, configure_upstream_remote
from forkflow.gateway.git.fake import FakeGit
from forkflow.gateway.git.types import CommandFailed
from tests.test_utils.setup_state import FORK_URL, UPSTREAM_URL, make_state


def test_adds_remote_named_after_upstream_owner(tmp_path: Path) -> None:
    git = FakeGit(remote_urls={(tmp_path, "origin"): FORK_URL})
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = configure_upstream_remote(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert git.added_remotes == [(tmp_path, "upstream-org", UPSTREAM_URL)]


def test_existing_remote_is_tolerated(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    git = FakeGit(
        remote_urls={
            (tmp_path, "origin"): FORK_URL,
            (tmp_path, "upstream-org"): UPSTREAM_URL,
        }
    )
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = configure_upstream_remote(ctx, make_state(tmp_path))

    assert not isinstance(result, SetupError)
    assert git.added_remotes == []
    assert "already exists" in capsys.readouterr().err


def test_remote_listing_is_displayed(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    git = FakeGit(remote_urls={(tmp_path, "origin"): FORK_URL})
    ctx = context_for_test(git=git, cwd=tmp_path)

    configure_upstream_remote(ctx, make_state(tmp_path))

    err = capsys.readouterr().err
    assert f"origin\t{FORK_URL} (fetch)" in err
    assert f"upstream-org\t{UPSTREAM_URL} (push)" in err


def test_other_add_failures_are_fatal(tmp_path: Path) -> None:
    git = FakeGit(add_remote_error=CommandFailed(message="fatal: not a git repository"))
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = configure_upstream_remote(ctx, make_state(tmp_path))

    assert isinstance(result, SetupError)
    assert result.error_type == "remote-add-failed"
