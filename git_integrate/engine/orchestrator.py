"""
Merge orchestration - fold every labelled branch into a destination branch.

A run walks a fixed sequence of states:

    START -> FETCHED -> ON_DESTINATION_BRANCH -> RESOLVING
          -> MERGING_BRANCH (once per branch) -> DONE

and stops in ABORTED at the first step that does not succeed cleanly. The
run never exits the process itself; it returns a RunResult and the CLI maps
that to an exit status.

Merge classification:
    A failed `git merge` is ambiguous: it fails both on content conflicts
    and when there is nothing to commit or a hook rejects the commit. The
    working tree is therefore checked for conflicted paths after every
    failed merge:

    - conflicted paths present: CONFLICT, the operator has to finish or
      abort the merge by hand, and no further branch is attempted
    - no conflicted paths: the merge is finalized with a plain commit;
      CLEAN if that works, COMMIT_FAILED otherwise

Example:
    >>> orchestrator = MergeOrchestrator(
    ...     git=SubprocessGitOperations(workdir),
    ...     resolver=GitHubBranchResolver(token, graphql_url),
    ...     identity=RepositoryIdentity(owner="acme", name="widgets"),
    ...     base_branch="main",
    ... )
    >>> result = await orchestrator.run("ready", "release")
    >>> result.exit_code
    0
"""

from collections.abc import Callable
from typing import Protocol

import click
import structlog

from git_integrate.enums import MergeOutcome, RunState
from git_integrate.exceptions import IntegrateError
from git_integrate.git.models import RepositoryIdentity
from git_integrate.git.operations import GitOperations
from git_integrate.models.domain import MergeResult, RunResult

log = structlog.get_logger(__name__)

CONFLICT_GUIDANCE = (
    "Merge conflict detected, either fix the conflict and\n"
    "use `git commit --no-edit` to commit this merge or use\n"
    "`git merge --abort` to quit this merge"
)


class BranchResolver(Protocol):
    """Anything that can turn a label into branch names."""

    async def resolve(self, identity: RepositoryIdentity, label: str) -> list[str]: ...


def conflict_message(result: MergeResult) -> str:
    """Operator guidance for a merge left in a conflicted state."""
    lines = [f"Merging {result.branch} stopped with conflicts in:"]
    lines.extend(f"  {path}" for path in result.conflicted_paths)
    lines.append("")
    lines.append(CONFLICT_GUIDANCE)
    return "\n".join(lines)


class MergeOrchestrator:
    """Drive one merge run.

    Attributes:
        git: Git capability the run mutates the checkout through
        resolver: Source of the branch sequence
        identity: Repository the pull requests belong to
        remote: Remote the branches are merged from
        base_branch: Branch of the remote the destination is reset to
    """

    def __init__(
        self,
        git: GitOperations,
        resolver: BranchResolver,
        identity: RepositoryIdentity,
        remote: str = "origin",
        base_branch: str = "master",
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self.git = git
        self.resolver = resolver
        self.identity = identity
        self.remote = remote
        self.base_branch = base_branch
        self.state = RunState.START
        self._echo = echo

    def remote_ref(self, branch: str) -> str:
        return f"{self.remote}/{branch}"

    def _transition(self, state: RunState, **kw: object) -> None:
        log.info("run_state", previous=str(self.state), state=str(state), **kw)
        self.state = state

    def _abort(
        self,
        reason: str,
        merged: list[str],
        branch: str | None = None,
        outcome: MergeOutcome | None = None,
    ) -> RunResult:
        log.error("run_aborted", state=str(self.state), branch=branch, reason=reason)
        self.state = RunState.ABORTED
        return RunResult.fatal(reason, merged=merged, branch=branch, outcome=outcome)

    async def run(self, label: str, destination: str) -> RunResult:
        """Fetch, reset the destination branch, and merge every labelled branch.

        Args:
            label: Pull request label to select branches by
            destination: Local branch to (re)create and merge into

        Returns:
            RunResult, successful only if every branch merged cleanly
        """
        merged: list[str] = []
        current: str | None = None
        self.state = RunState.START

        try:
            if not await self.git.fetch_all():
                return self._abort("Error fetching from remote", merged)
            self._transition(RunState.FETCHED)

            start_point = self.remote_ref(self.base_branch)
            if not await self.git.reset_branch(destination, start_point):
                return self._abort(f"Could not checkout branch {destination} from {start_point}", merged)
            self._transition(RunState.ON_DESTINATION_BRANCH, branch=destination, start_point=start_point)

            self._transition(RunState.RESOLVING, label=label)
            branches = await self.resolver.resolve(self.identity, label)

            for index, branch in enumerate(branches):
                current = branch
                self._transition(RunState.MERGING_BRANCH, branch=branch, index=index, total=len(branches))
                self._echo(f"\nMerging {branch}")

                result = await self.merge_branch(branch)
                if result.outcome == MergeOutcome.CONFLICT:
                    return self._abort(conflict_message(result), merged, branch, result.outcome)
                if result.outcome == MergeOutcome.COMMIT_FAILED:
                    return self._abort(f"Failure merging branch {branch}", merged, branch, result.outcome)

                merged.append(branch)
        except IntegrateError as e:
            reason = f"Error merging branch {current}: {e}" if current else str(e)
            return self._abort(reason, merged, current)

        self._transition(RunState.DONE, merged=len(merged))
        return RunResult.success(merged)

    async def merge_branch(self, branch: str) -> MergeResult:
        """Merge one remote branch into the checkout and classify the outcome.

        The merge exit status alone never decides between CONFLICT and the
        finalize-commit path; the conflicted-path query does.
        """
        ref = self.remote_ref(branch)

        if await self.git.merge(ref):
            log.info("merge_clean", branch=branch)
            return MergeResult(branch=branch, outcome=MergeOutcome.CLEAN)

        conflicted = await self.git.conflicted_paths()
        if conflicted:
            log.warning("merge_conflict", branch=branch, paths=conflicted)
            return MergeResult(branch=branch, outcome=MergeOutcome.CONFLICT, conflicted_paths=conflicted)

        log.info("merge_failed_without_conflicts", branch=branch)
        if await self.git.commit():
            log.info("merge_finalized", branch=branch)
            return MergeResult(branch=branch, outcome=MergeOutcome.CLEAN)

        log.error("merge_commit_failed", branch=branch)
        return MergeResult(branch=branch, outcome=MergeOutcome.COMMIT_FAILED)
