"""CLI entry point for git-integrate."""

import asyncio
import sys

import click
import structlog

from git_integrate.config.settings import IntegrateSettings
from git_integrate.credentials import GitConfigBackend, fetch_credential
from git_integrate.engine.orchestrator import MergeOrchestrator
from git_integrate.exceptions import IntegrateError
from git_integrate.git.discovery import GitDiscovery
from git_integrate.git.operations import SubprocessGitOperations
from git_integrate.providers.github_graphql import GitHubBranchResolver
from git_integrate.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


class IntegrateCommand(click.Command):
    """Command whose usage errors exit with status 1 like every other failure."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def build_orchestrator(discovery: GitDiscovery, settings: IntegrateSettings) -> MergeOrchestrator:
    """Wire a MergeOrchestrator for the checkout `discovery` points at.

    Everything that can fail for configuration reasons happens here, before
    any git subprocess or network call.

    Raises:
        IntegrateError: If the repository, remote or credential can't be found
    """
    identity = discovery.repository_identity(settings.remote)
    token = fetch_credential(GitConfigBackend(discovery.repo), settings.token_key)
    base_branch = settings.resolve_base_branch(discovery.default_branch(settings.remote))
    graphql_url = settings.graphql_url or discovery.parse_remote(settings.remote).graphql_url

    log.info(
        "run_configured",
        repository=identity.full_name,
        remote=settings.remote,
        base_branch=base_branch,
        graphql_url=graphql_url,
    )

    return MergeOrchestrator(
        git=SubprocessGitOperations(discovery.working_dir),
        resolver=GitHubBranchResolver(token, graphql_url, timeout=settings.http_timeout),
        identity=identity,
        remote=settings.remote,
        base_branch=base_branch,
    )


@click.command(cls=IntegrateCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("label")
@click.argument("branch")
def cli(label: str, branch: str) -> None:
    """Merge every open pull request labelled LABEL into a fresh BRANCH.

    BRANCH is recreated from the remote's default branch, then the head
    branch of each open pull request carrying LABEL is merged into it in
    turn. The run stops at the first conflict, leaving the merge in
    progress for you to finish with `git commit --no-edit` or abandon with
    `git merge --abort`.

    The GitHub token is read from git config:

        git config --global integrate.github-token <token>

    Examples:

        git-integrate ready release
        git integrate "merge when ready" staging
    """
    configure_logging()

    try:
        discovery = GitDiscovery()
        settings = IntegrateSettings.load(discovery.git_dir)
        configure_logging(settings.log_level, settings.json_logs)
        orchestrator = build_orchestrator(discovery, settings)
    except IntegrateError as e:
        click.echo(f"Error: {e}", err=True)
        log.debug("configuration_error", exc_info=True)
        sys.exit(1)

    try:
        result = asyncio.run(orchestrator.run(label, branch))
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(1)

    if not result.succeeded:
        if result.outcome is not None:
            click.echo(f"\n{result.reason}")
        else:
            click.echo(f"Error: {result.reason}", err=True)

    sys.exit(result.exit_code)


if __name__ == "__main__":
    cli()
