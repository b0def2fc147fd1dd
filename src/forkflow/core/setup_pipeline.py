"""Linear pipeline that prepares a fork checkout and feature branch.

Each stage checks the current state before changing anything, so re-running
forkflow against an existing fork and checkout is safe.

Each step: (ForkflowContext, SetupState) -> SetupState | SetupError
"""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import cache
from pathlib import Path

from forkflow.core.context import ForkflowContext
from forkflow.core.remote_urls import (
    InvocationParams,
    clone_directory_name,
    fork_url,
    upstream_url,
)
from forkflow.gateway.git.types import (
    CommandFailed,
    Existence,
    QueryFailed,
    RemoteAlreadyExists,
)
from forkflow.output import user_output

logger = logging.getLogger(__name__)

SYNC_FORK_DOCS_URL = (
    "https://docs.github.com/en/pull-requests/collaborating-with-pull-requests/"
    "working-with-forks/syncing-a-fork"
)

# ---------------------------------------------------------------------------
# Data Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetupState:
    """Immutable state threaded through the setup pipeline."""

    # CLI inputs
    params: InvocationParams
    upstream_owner: str
    primary_branch: str

    # Derived once from the inputs
    fork_url: str
    upstream_url: str

    # Directory every git command runs in; moves into the clone after cloning
    workspace: Path

    # Populated by later steps
    fork_existed: bool
    cloned: bool
    branch_created: bool


@dataclass(frozen=True)
class SetupError:
    """Error result from a pipeline step."""

    phase: str
    error_type: str
    message: str
    details: dict[str, str]


SetupStep = Callable[[ForkflowContext, SetupState], SetupState | SetupError]


# ---------------------------------------------------------------------------
# Pipeline Steps
# ---------------------------------------------------------------------------


def resolve_fork(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Create the account's fork unless it can already be listed.

    Populates: fork_existed.
    """
    params = state.params
    probe = ctx.git.probe_remote(state.workspace, state.fork_url)
    if isinstance(probe, QueryFailed):
        return SetupError(
            phase="resolve_fork",
            error_type="fork-probe-failed",
            message=f"Could not determine whether {state.fork_url} exists:\n{probe.message}",
            details={"url": state.fork_url},
        )

    if probe is Existence.EXISTS:
        user_output(f"Fork {params.account}/{params.repository} already exists")
        return dataclasses.replace(state, fork_existed=True)

    if ctx.shell.get_installed_tool_path("curl") is None:
        return SetupError(
            phase="resolve_fork",
            error_type="missing-dependency",
            message=(
                "curl is required to create the fork but was not found on PATH.\n"
                "Install curl, or fork "
                f"{state.upstream_owner}/{params.repository} in the web UI and re-run."
            ),
            details={"dependency": "curl"},
        )

    user_output(
        f"Forking {state.upstream_owner}/{params.repository} into {params.account}..."
    )
    result = ctx.github.create_fork(
        upstream_owner=state.upstream_owner,
        repository=params.repository,
        account=params.account,
    )
    if isinstance(result, CommandFailed):
        return SetupError(
            phase="resolve_fork",
            error_type="fork-creation-failed",
            message=result.message,
            details={"upstream": f"{state.upstream_owner}/{params.repository}"},
        )
    return dataclasses.replace(state, fork_existed=False)


def resolve_checkout(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Reuse the current directory if it is the fork, otherwise clone it.

    Populates: workspace, cloned.
    """
    if ctx.git.path_exists(state.workspace / ".git"):
        origin = ctx.git.get_remote_url(state.workspace, "origin")
        if isinstance(origin, QueryFailed):
            return SetupError(
                phase="resolve_checkout",
                error_type="origin-query-failed",
                message=f"Could not read the origin remote of {state.workspace}:\n{origin.message}",
                details={"workspace": str(state.workspace)},
            )
        if origin == state.fork_url:
            user_output(f"Reusing existing checkout at {state.workspace}")
            return dataclasses.replace(state, cloned=False)
        logger.debug("origin %r does not match %s; cloning", origin, state.fork_url)

    destination = state.workspace / clone_directory_name(state.params)
    result = ctx.git.clone(state.workspace, state.fork_url, destination)
    if isinstance(result, CommandFailed):
        return SetupError(
            phase="resolve_checkout",
            error_type="clone-failed",
            message=result.message,
            details={"url": state.fork_url, "destination": str(destination)},
        )
    return dataclasses.replace(state, workspace=destination, cloned=True)


def run_post_clone_setup(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Run the repository's own setup script when it ships one."""
    script = state.workspace / ctx.config.post_clone_script
    if not ctx.git.path_exists(script):
        return state

    result = ctx.shell.run_script(script, cwd=state.workspace)
    if isinstance(result, CommandFailed):
        return SetupError(
            phase="run_post_clone_setup",
            error_type="post-clone-setup-failed",
            message=result.message,
            details={"script": str(script)},
        )
    return state


def configure_upstream_remote(
    ctx: ForkflowContext, state: SetupState
) -> SetupState | SetupError:
    """Add a remote named after the upstream owner and show all remotes."""
    result = ctx.git.add_remote(state.workspace, state.upstream_owner, state.upstream_url)
    if isinstance(result, RemoteAlreadyExists):
        user_output(f"Remote '{result.remote}' already exists")
    elif isinstance(result, CommandFailed):
        return SetupError(
            phase="configure_upstream_remote",
            error_type="remote-add-failed",
            message=result.message,
            details={"remote": state.upstream_owner},
        )

    listing = ctx.git.list_remotes(state.workspace)
    if isinstance(listing, CommandFailed):
        return SetupError(
            phase="configure_upstream_remote",
            error_type="remote-list-failed",
            message=listing.message,
            details={},
        )
    user_output(listing)
    return state


def sync_primary_branch(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Merge upstream's primary branch into the fork's and push it.

    Only runs for a fork that existed before this run; a fresh fork already
    matches upstream. A failed merge is aborted and reported, never resolved.
    """
    if not state.fork_existed:
        return state

    remote = state.upstream_owner
    primary = state.primary_branch

    fetched = ctx.git.fetch_remote(state.workspace, remote)
    if isinstance(fetched, CommandFailed):
        return _sync_error("fetch-failed", fetched.message, state)

    checked_out = ctx.git.checkout_branch(state.workspace, primary)
    if isinstance(checked_out, CommandFailed):
        return _sync_error("checkout-failed", checked_out.message, state)

    upstream_ref = f"{remote}/{primary}"
    merged = ctx.git.merge_no_edit(state.workspace, upstream_ref)
    if isinstance(merged, CommandFailed):
        aborted = ctx.git.abort_merge(state.workspace)
        message = (
            f"Your fork's {primary} branch has diverged from {upstream_ref} and could not "
            "be merged automatically. The merge was aborted.\n"
            f"Reconcile {_fork_name(state)}'s {primary} branch with {upstream_ref} "
            "manually, then re-run forkflow.\n"
            f"See {SYNC_FORK_DOCS_URL}"
        )
        if isinstance(aborted, CommandFailed):
            message = f"{message}\n\nAborting the merge also failed:\n{aborted.message}"
        return _sync_error("primary-branch-diverged", message, state)

    pushed = ctx.git.push_to_remote(state.workspace, "origin", primary, set_upstream=False)
    if isinstance(pushed, CommandFailed):
        return _sync_error("push-failed", pushed.message, state)
    return state


def resolve_feature_branch(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Switch to the feature branch, creating it first if needed, and track the fork.

    Populates: branch_created.
    """
    branch = state.params.branch
    exists = ctx.git.local_branch_exists(state.workspace, branch)
    if isinstance(exists, QueryFailed):
        return SetupError(
            phase="resolve_feature_branch",
            error_type="branch-query-failed",
            message=f"Could not check for branch '{branch}':\n{exists.message}",
            details={"branch": branch},
        )

    branch_created = exists is Existence.ABSENT
    if branch_created:
        result = ctx.git.create_and_checkout_branch(state.workspace, branch)
    else:
        result = ctx.git.checkout_branch(state.workspace, branch)
    if isinstance(result, CommandFailed):
        return SetupError(
            phase="resolve_feature_branch",
            error_type="checkout-failed",
            message=result.message,
            details={"branch": branch},
        )

    pushed = ctx.git.push_to_remote(state.workspace, "origin", branch, set_upstream=True)
    if isinstance(pushed, CommandFailed):
        return SetupError(
            phase="resolve_feature_branch",
            error_type="push-failed",
            message=pushed.message,
            details={"branch": branch},
        )
    return dataclasses.replace(state, branch_created=branch_created)


def _fork_name(state: SetupState) -> str:
    return f"{state.params.account}/{state.params.repository}"


def _sync_error(error_type: str, message: str, state: SetupState) -> SetupError:
    return SetupError(
        phase="sync_primary_branch",
        error_type=error_type,
        message=message,
        details={"remote": state.upstream_owner, "branch": state.primary_branch},
    )


# ---------------------------------------------------------------------------
# Pipeline Definition
# ---------------------------------------------------------------------------


@cache
def _setup_pipeline() -> tuple[SetupStep, ...]:
    return (
        resolve_fork,
        resolve_checkout,
        run_post_clone_setup,
        configure_upstream_remote,
        sync_primary_branch,
        resolve_feature_branch,
    )


def run_setup_pipeline(ctx: ForkflowContext, state: SetupState) -> SetupState | SetupError:
    """Run the setup pipeline, returning final state or first error."""
    for step in _setup_pipeline():
        logger.debug("Running step %s", step.__name__)
        result = step(ctx, state)
        if isinstance(result, SetupError):
            return result
        state = result
    return state


# ---------------------------------------------------------------------------
# State Factories
# ---------------------------------------------------------------------------


def make_initial_state(
    *,
    params: InvocationParams,
    upstream_owner: str,
    primary_branch: str,
    host: str,
    cwd: Path,
) -> SetupState:
    return SetupState(
        params=params,
        upstream_owner=upstream_owner,
        primary_branch=primary_branch,
        fork_url=fork_url(params, host=host),
        upstream_url=upstream_url(params, host=host, upstream_owner=upstream_owner),
        workspace=cwd,
        fork_existed=False,
        cloned=False,
        branch_created=False,
    )
