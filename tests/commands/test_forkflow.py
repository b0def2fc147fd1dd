"""Tests for the forkflow command."""

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from forkflow.cli.cli import cli
from forkflow.cli.config import LoadedConfig
from forkflow.core.context import context_for_test
from forkflow.gateway.git.fake import FakeGit, PushedBranch
from forkflow.gateway.github.fake import CreatedFork, FakeGitHub
from forkflow.gateway.shell.fake import FakeShell

FORK_URL = "git@github.com:alice/mylib.git"
UPSTREAM_URL = "git@github.com:upstream-org/mylib.git"


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["ssh"],
        ["ssh", "alice"],
        ["ssh", "alice", "mylib"],
        ["ssh", "alice", "mylib", "feature-x", "extra"],
    ],
)
def test_wrong_argument_count_prints_usage(args: list[str]) -> None:
    runner = CliRunner()
    git = FakeGit()
    ctx = context_for_test(git=git)

    result = runner.invoke(cli, args, obj=ctx, catch_exceptions=False)

    assert result.exit_code == 0, result.output
    assert "Usage: forkflow" in result.output
    assert "Example:" in result.output
    assert git.probed_urls == []


def test_new_fork_and_fresh_clone(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit()
    github = FakeGitHub()
    ctx = context_for_test(git=git, github=github, cwd=tmp_path)

    result = runner.invoke(
        cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx, catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    clone_dir = tmp_path / "mylib-feature-x"
    assert github.created_forks == [
        CreatedFork(upstream_owner="upstream-org", repository="mylib", account="alice")
    ]
    assert git.cloned_repos == [(FORK_URL, clone_dir)]
    assert git.added_remotes == [(clone_dir, "upstream-org", UPSTREAM_URL)]
    assert git.fetched_remotes == []
    assert git.merged_refs == []
    assert git.created_branches == [(clone_dir, "feature-x")]
    assert git.pushed_branches == [
        PushedBranch(remote="origin", branch="feature-x", set_upstream=True)
    ]
    assert "cd mylib-feature-x" in result.output


def test_existing_fork_and_matching_checkout(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit(
        reachable_urls={FORK_URL},
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): FORK_URL},
    )
    github = FakeGitHub()
    ctx = context_for_test(git=git, github=github, cwd=tmp_path)

    result = runner.invoke(
        cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx, catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert github.created_forks == []
    assert git.cloned_repos == []
    assert git.operation_log == [
        f"remote add upstream-org {UPSTREAM_URL}",
        "fetch upstream-org",
        "checkout master",
        "merge upstream-org/master",
        "push origin master",
        "checkout -b feature-x",
        "push --set-upstream origin feature-x",
    ]
    assert "cd mylib-feature-x" not in result.output


def test_https_auth_uses_web_addresses(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit()
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = runner.invoke(
        cli, ["https", "alice", "mylib", "feature-x"], obj=ctx, catch_exceptions=False
    )

    assert result.exit_code == 0, result.output
    assert git.cloned_repos == [
        ("https://github.com/alice/mylib.git", tmp_path / "mylib-feature-x")
    ]


def test_merge_conflict_exits_nonzero(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit(
        reachable_urls={FORK_URL},
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): FORK_URL},
        merge_conflicts={"upstream-org/master"},
    )
    ctx = context_for_test(git=git, cwd=tmp_path)

    result = runner.invoke(cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx)

    assert result.exit_code == 1
    assert "diverged" in result.output
    assert git.aborted_merges == [tmp_path]
    assert git.created_branches == []
    assert "Next steps" not in result.output


def test_missing_curl_names_dependency(tmp_path: Path) -> None:
    runner = CliRunner()
    github = FakeGitHub()
    ctx = context_for_test(github=github, shell=FakeShell(installed_tools={}), cwd=tmp_path)

    result = runner.invoke(cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx)

    assert result.exit_code == 1
    assert "curl" in result.output
    assert github.created_forks == []


def test_missing_upstream_owner_is_an_error(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit()
    ctx = context_for_test(git=git, cwd=tmp_path, config=LoadedConfig.defaults())

    result = runner.invoke(cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx)

    assert result.exit_code == 1
    assert "No upstream owner configured" in result.output
    assert git.probed_urls == []


def test_options_override_config(tmp_path: Path) -> None:
    runner = CliRunner()
    git = FakeGit(
        reachable_urls={FORK_URL},
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): FORK_URL},
    )
    ctx = context_for_test(git=git, cwd=tmp_path, config=LoadedConfig.defaults())

    result = runner.invoke(
        cli,
        [
            "--upstream-owner",
            "other-org",
            "--primary-branch",
            "main",
            "ssh",
            "alice",
            "mylib",
            "feature-x",
        ],
        obj=ctx,
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert "merge other-org/main" in git.operation_log
    assert "compare/main...alice:feature-x" in result.output


def test_usage_explains_upstream_owner_and_setup_script() -> None:
    runner = CliRunner()

    result = runner.invoke(cli, [], obj=context_for_test(), catch_exceptions=False)

    intro = result.output.split("\n\n")[1]
    assert "upstream owner has no default" in intro
    assert "--upstream-owner" in intro
    assert "scripts/post-clone-setup.sh" in result.output
    assert "post_clone_script" in result.output


def test_error_details_are_logged_at_debug(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    runner = CliRunner()
    git = FakeGit(
        reachable_urls={FORK_URL},
        existing_paths={tmp_path / ".git"},
        remote_urls={(tmp_path, "origin"): FORK_URL},
        merge_conflicts={"upstream-org/master"},
    )
    ctx = context_for_test(git=git, cwd=tmp_path)

    with caplog.at_level(logging.DEBUG, logger="forkflow.cli.cli"):
        result = runner.invoke(cli, ["ssh", "alice", "mylib", "feature-x"], obj=ctx)

    assert result.exit_code == 1
    assert "sync_primary_branch failed with primary-branch-diverged" in caplog.text
    assert "'branch': 'master'" in caplog.text
