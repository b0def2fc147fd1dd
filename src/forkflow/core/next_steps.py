"""Next steps shown after a successful setup - single source of truth."""

import shlex
from dataclasses import dataclass


@dataclass(frozen=True)
class PullRequestNextSteps:
    """Canonical commands for finishing work on a prepared branch."""

    host: str
    upstream_owner: str
    account: str
    repository: str
    branch: str
    primary_branch: str

    @property
    def verify(self) -> str:
        return 'echo "$(git remote get-url origin) @ $(git rev-parse --abbrev-ref HEAD)"'

    @property
    def commit_and_push(self) -> str:
        return 'git add -A && git commit -m "<message>" && git push'

    @property
    def compare_url(self) -> str:
        return (
            f"https://{self.host}/{self.upstream_owner}/{self.repository}/compare/"
            f"{self.primary_branch}...{self.account}:{self.branch}"
        )

    @property
    def gh_create(self) -> str:
        repo = f"{self.upstream_owner}/{self.repository}"
        return shlex.join(
            ["gh", "pr", "create", "--repo", repo, "--base", self.primary_branch]
        )

    @property
    def hub_create(self) -> str:
        return shlex.join(
            ["hub", "pull-request", "--base", f"{self.upstream_owner}:{self.primary_branch}"]
        )


def format_next_steps_plain(steps: PullRequestNextSteps, *, clone_dir: str | None) -> str:
    """Format for CLI output (plain text).

    Args:
        steps: Commands for the prepared branch
        clone_dir: Directory created by this run's clone, or None when an
            existing checkout was reused
    """
    lines = ["Next steps:", ""]
    items: list[str] = []
    if clone_dir is not None:
        items.append(f"Change into the new checkout: cd {shlex.quote(clone_dir)}")
    items.extend(
        [
            f"Confirm the repository and branch: {steps.verify}",
            "Make your changes",
            f"Stage, commit and push: {steps.commit_and_push}",
            f"Open a pull request: {steps.compare_url}",
        ]
    )
    lines.extend(f"  {number}. {item}" for number, item in enumerate(items, start=1))
    lines.extend(
        [
            "",
            "Or open the pull request from the command line:",
            f"  GitHub CLI: {steps.gh_create}",
            f"  hub:        {steps.hub_create}",
        ]
    )
    return "\n".join(lines)
