import dataclasses
import logging
from pathlib import Path

import click

from forkflow.cli.config import ConfigError, default_config_path, load_config
from forkflow.core.context import ForkflowContext, create_context
from forkflow.core.next_steps import PullRequestNextSteps, format_next_steps_plain
from forkflow.core.remote_urls import AuthScheme, InvocationParams, clone_directory_name
from forkflow.core.setup_pipeline import SetupError, make_initial_state, run_setup_pipeline
from forkflow.output import machine_output, user_output

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

USAGE_TEXT = """\
Usage: forkflow [OPTIONS] AUTH ACCOUNT REPOSITORY BRANCH

Prepare a branch for a pull request against an upstream repository. forkflow
forks UPSTREAM/REPOSITORY into ACCOUNT if needed, clones the fork (or reuses
the checkout you are standing in), adds UPSTREAM as a remote, brings the
fork's primary branch up to date and checks out BRANCH tracking the fork.
The upstream owner has no default: pass --upstream-owner, set
FORKFLOW_UPSTREAM_OWNER, or add upstream_owner to ~/.forkflow/config.toml.

Arguments:
  AUTH        "ssh" for git@host:owner/repo.git remotes (key-based); any
              other value uses https://host/owner/repo.git remotes
  ACCOUNT     account or organization that owns (or will own) the fork
  REPOSITORY  repository name, shared by the fork and upstream
  BRANCH      feature branch to create, or to reuse if it already exists

Example:
  forkflow --upstream-owner example-org ssh alice mylib feature-x

  Forks example-org/mylib into alice (unless alice/mylib exists), clones
  git@github.com:alice/mylib.git into ./mylib-feature-x and leaves
  feature-x checked out, tracking origin/feature-x.

Notes:
  Every step checks the current state first, so re-running is safe. Each
  command is printed before it runs and the first failure stops the run.
  If the fork's primary branch cannot be merged cleanly with upstream, the
  merge is aborted and you must reconcile it by hand. Credentials come from
  your git and curl setup (or GITHUB_TOKEN for the fork request).
  Once the checkout is ready, forkflow runs scripts/post-clone-setup.sh
  from it if the repository has one. This path is a forkflow convention;
  set post_clone_script in the config file to use another.

Options:
  --upstream-owner TEXT  upstream account (or set upstream_owner in config)
  --primary-branch TEXT  primary branch to sync (default: master)
  --config FILE          config file (default: ~/.forkflow/config.toml)
  --debug                enable debug logging
  --version              show the version and exit
  -h, --help             show this message and exit"""


@click.command("forkflow", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="forkflow")
@click.option(
    "--upstream-owner",
    envvar="FORKFLOW_UPSTREAM_OWNER",
    default=None,
    help="Account that owns the upstream repository",
)
@click.option("--primary-branch", default=None, help="Primary branch to sync with upstream")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    envvar="FORKFLOW_CONFIG",
    default=None,
    help="Path to config.toml",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.argument("args", nargs=-1, metavar="AUTH ACCOUNT REPOSITORY BRANCH")
@click.pass_context
def cli(
    ctx: click.Context,
    args: tuple[str, ...],
    upstream_owner: str | None,
    primary_branch: str | None,
    config_path: Path | None,
    debug: bool,
) -> None:
    """Fork REPOSITORY into ACCOUNT and prepare BRANCH for a pull request.

    Run without arguments for a full explanation of AUTH, ACCOUNT, REPOSITORY
    and BRANCH.
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    if len(args) != 4:
        machine_output(USAGE_TEXT)
        return

    auth, account, repository, branch = args
    params = InvocationParams(
        auth=AuthScheme.from_argument(auth),
        account=account,
        repository=repository,
        branch=branch,
    )

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            config = load_config(config_path or default_config_path())
        except ConfigError as e:
            user_output(click.style("Error: ", fg="red") + str(e))
            raise SystemExit(1) from None
        ctx.obj = create_context(config=config)

    forkflow_ctx: ForkflowContext = ctx.obj
    config = forkflow_ctx.config.with_overrides(
        upstream_owner=upstream_owner, primary_branch=primary_branch
    )
    forkflow_ctx = dataclasses.replace(forkflow_ctx, config=config)

    if config.upstream_owner is None:
        user_output(
            click.style("Error: ", fg="red")
            + "No upstream owner configured.\n"
            + "Pass --upstream-owner, set FORKFLOW_UPSTREAM_OWNER, "
            + "or add upstream_owner to your config file."
        )
        raise SystemExit(1)

    state = make_initial_state(
        params=params,
        upstream_owner=config.upstream_owner,
        primary_branch=config.primary_branch,
        host=config.host,
        cwd=forkflow_ctx.cwd,
    )
    result = run_setup_pipeline(forkflow_ctx, state)
    if isinstance(result, SetupError):
        logger.debug(
            "%s failed with %s: %s", result.phase, result.error_type, result.details
        )
        user_output(click.style("Error: ", fg="red") + result.message)
        raise SystemExit(1)

    verb = "Created" if result.branch_created else "Checked out"
    user_output(
        click.style("✓", fg="green") + f" {verb} {branch} in {result.workspace}, tracking origin"
    )
    steps = PullRequestNextSteps(
        host=config.host,
        upstream_owner=config.upstream_owner,
        account=account,
        repository=repository,
        branch=branch,
        primary_branch=config.primary_branch,
    )
    clone_dir = clone_directory_name(params) if result.cloned else None
    machine_output(format_next_steps_plain(steps, clone_dir=clone_dir))


def main() -> None:
    """CLI entry point used by the `forkflow` console script."""
    cli()
