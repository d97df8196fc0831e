"""Unit tests for git_integrate.engine.orchestrator.

Tests cover:
- The fetch -> reset -> resolve -> merge sequence
- Fail-fast on fetch, reset, resolution and merge failures
- Conflict vs. finalize-commit classification of failed merges
- Preservation of resolution order into merge order
"""

import pytest

from git_integrate.engine.orchestrator import CONFLICT_GUIDANCE, MergeOrchestrator, conflict_message
from git_integrate.enums import MergeOutcome, RunState
from git_integrate.exceptions import GitCommandError, TransportError
from git_integrate.models.domain import MergeResult


@pytest.fixture
def echoed() -> list[str]:
    return []


@pytest.fixture
def orchestrator(fake_git, fake_resolver, identity, echoed) -> MergeOrchestrator:
    return MergeOrchestrator(
        git=fake_git,
        resolver=fake_resolver,
        identity=identity,
        remote="origin",
        base_branch="main",
        echo=echoed.append,
    )


class TestSuccessfulRuns:
    """Runs where every step succeeds."""

    @pytest.mark.asyncio
    async def test_two_clean_merges(self, orchestrator, fake_git, fake_resolver, echoed) -> None:
        """Both branches merge cleanly, progress is printed for each."""
        fake_resolver.branches = ["feature-a", "feature-b"]

        result = await orchestrator.run("ready", "release")

        assert result.succeeded
        assert result.exit_code == 0
        assert result.state == RunState.DONE
        assert result.merged == ["feature-a", "feature-b"]
        assert echoed == ["\nMerging feature-a", "\nMerging feature-b"]
        assert fake_git.calls == [
            ("fetch_all",),
            ("reset_branch", "release", "origin/main"),
            ("merge", "origin/feature-a"),
            ("merge", "origin/feature-b"),
        ]

    @pytest.mark.asyncio
    async def test_no_matching_pull_requests(self, orchestrator, fake_git, fake_resolver, echoed) -> None:
        """An empty branch sequence still fetches and resets, then succeeds."""
        fake_resolver.branches = []

        result = await orchestrator.run("ready", "release")

        assert result.succeeded
        assert result.merged == []
        assert echoed == []
        assert fake_git.calls == [
            ("fetch_all",),
            ("reset_branch", "release", "origin/main"),
        ]

    @pytest.mark.asyncio
    async def test_resolver_called_once_with_label(self, orchestrator, fake_resolver, identity) -> None:
        """The branch sequence is resolved exactly once per run."""
        fake_resolver.branches = ["a", "b", "c"]

        await orchestrator.run("ready", "release")

        assert fake_resolver.calls == [(identity, "ready")]

    @pytest.mark.asyncio
    async def test_resolution_order_preserved(self, orchestrator, fake_git, fake_resolver) -> None:
        """Merge order is resolution order, duplicates included."""
        fake_resolver.branches = ["zeta", "alpha", "mid", "alpha"]

        result = await orchestrator.run("ready", "release")

        assert fake_git.merged_refs == ["origin/zeta", "origin/alpha", "origin/mid", "origin/alpha"]
        assert result.merged == ["zeta", "alpha", "mid", "alpha"]

    @pytest.mark.asyncio
    async def test_resolution_happens_after_checkout(self, fake_git, identity) -> None:
        """The resolver is only consulted once the destination branch exists."""
        order: list[str] = []

        class RecordingResolver:
            async def resolve(self, identity, label):
                order.append(f"resolve after {len(fake_git.calls)} git calls")
                return []

        orchestrator = MergeOrchestrator(fake_git, RecordingResolver(), identity, echo=lambda _: None)
        await orchestrator.run("ready", "release")

        assert order == ["resolve after 2 git calls"]

    @pytest.mark.asyncio
    async def test_rerun_reproduces_same_sequence(self, orchestrator, fake_git, fake_resolver) -> None:
        """Running twice resets to the same start point and retries the same branches."""
        fake_resolver.branches = ["feature-a", "feature-b"]

        await orchestrator.run("ready", "release")
        first = list(fake_git.calls)
        fake_git.calls.clear()
        await orchestrator.run("ready", "release")

        assert fake_git.calls == first
        assert len(fake_resolver.calls) == 2

    @pytest.mark.asyncio
    async def test_custom_remote_and_base(self, fake_git, fake_resolver, identity) -> None:
        """Refs are built from the configured remote and base branch."""
        fake_resolver.branches = ["topic"]
        orchestrator = MergeOrchestrator(
            fake_git, fake_resolver, identity, remote="upstream", base_branch="develop", echo=lambda _: None
        )

        await orchestrator.run("ready", "integration")

        assert ("reset_branch", "integration", "upstream/develop") in fake_git.calls
        assert fake_git.merged_refs == ["upstream/topic"]


class TestFailFast:
    """Runs that stop before all branches are merged."""

    @pytest.mark.asyncio
    async def test_fetch_failure_stops_everything(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_git.fetch_ok = False
        fake_resolver.branches = ["feature-a"]

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert result.exit_code == 1
        assert result.state == RunState.ABORTED
        assert fake_git.calls == [("fetch_all",)]
        assert fake_resolver.calls == []

    @pytest.mark.asyncio
    async def test_checkout_failure_stops_before_resolution(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_git.reset_ok = False
        fake_resolver.branches = ["feature-a"]

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert "release" in result.reason
        assert fake_resolver.calls == []
        assert fake_git.merged_refs == []

    @pytest.mark.asyncio
    async def test_resolution_error_is_fatal(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_resolver.error = TransportError("Request to https://api.github.com/graphql failed: boom")

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert result.exit_code == 1
        assert result.reason == "Request to https://api.github.com/graphql failed: boom"
        assert result.branch is None
        assert result.outcome is None
        assert fake_git.merged_refs == []

    @pytest.mark.asyncio
    async def test_conflict_stops_remaining_branches(self, orchestrator, fake_git, fake_resolver, echoed) -> None:
        """A conflicted merge is never followed by another merge or a commit."""
        fake_resolver.branches = ["feature-a", "feature-b", "feature-c"]
        fake_git.failing_merges = {"origin/feature-b"}
        fake_git.conflicts = {"origin/feature-b": ["src/app.py", "README.md"]}

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert result.outcome == MergeOutcome.CONFLICT
        assert result.branch == "feature-b"
        assert result.merged == ["feature-a"]
        assert fake_git.merged_refs == ["origin/feature-a", "origin/feature-b"]
        assert ("commit",) not in fake_git.calls
        assert echoed == ["\nMerging feature-a", "\nMerging feature-b"]
        assert CONFLICT_GUIDANCE in result.reason
        assert "src/app.py" in result.reason
        assert "feature-c" not in result.reason

    @pytest.mark.asyncio
    async def test_single_branch_conflict(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_resolver.branches = ["feature-a"]
        fake_git.failing_merges = {"origin/feature-a"}
        fake_git.conflicts = {"origin/feature-a": ["setup.cfg"]}

        result = await orchestrator.run("ready", "release")

        assert result.exit_code == 1
        assert result.outcome == MergeOutcome.CONFLICT
        assert "git merge --abort" in result.reason
        assert "git commit --no-edit" in result.reason

    @pytest.mark.asyncio
    async def test_commit_failure_is_fatal(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_resolver.branches = ["feature-a", "feature-b"]
        fake_git.failing_merges = {"origin/feature-a"}
        fake_git.commit_ok = False

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert result.outcome == MergeOutcome.COMMIT_FAILED
        assert result.reason == "Failure merging branch feature-a"
        assert fake_git.merged_refs == ["origin/feature-a"]

    @pytest.mark.asyncio
    async def test_git_command_error_is_fatal(self, orchestrator, fake_git, fake_resolver) -> None:
        """A git executable that cannot start aborts the run with the branch named."""
        fake_resolver.branches = ["feature-a"]
        fake_git.failing_merges = {"origin/feature-a"}

        async def broken_status() -> list[str]:
            raise GitCommandError(["diff"], "No such file or directory")

        fake_git.conflicted_paths = broken_status

        result = await orchestrator.run("ready", "release")

        assert not result.succeeded
        assert result.branch == "feature-a"
        assert result.reason == (
            "Error merging branch feature-a: Could not run 'git diff': No such file or directory"
        )


class TestMergeClassification:
    """Tests for merge_branch() outcome classification."""

    @pytest.mark.asyncio
    async def test_clean_merge_skips_status_check(self, orchestrator, fake_git) -> None:
        result = await orchestrator.merge_branch("feature-a")

        assert result == MergeResult(branch="feature-a", outcome=MergeOutcome.CLEAN)
        assert fake_git.calls == [("merge", "origin/feature-a")]

    @pytest.mark.asyncio
    async def test_failed_merge_without_conflicts_is_finalized(self, orchestrator, fake_git) -> None:
        """A failed merge with no conflicted paths is committed and counts as clean."""
        fake_git.failing_merges = {"origin/feature-a"}

        result = await orchestrator.merge_branch("feature-a")

        assert result.outcome == MergeOutcome.CLEAN
        assert fake_git.calls == [
            ("merge", "origin/feature-a"),
            ("conflicted_paths",),
            ("commit",),
        ]

    @pytest.mark.asyncio
    async def test_finalized_merge_continues_run(self, orchestrator, fake_git, fake_resolver) -> None:
        fake_resolver.branches = ["feature-a", "feature-b"]
        fake_git.failing_merges = {"origin/feature-a"}

        result = await orchestrator.run("ready", "release")

        assert result.succeeded
        assert result.merged == ["feature-a", "feature-b"]

    @pytest.mark.asyncio
    async def test_conflict_decided_by_status_not_exit_code(self, orchestrator, fake_git) -> None:
        """Same merge failure, different status query answer, different outcome."""
        fake_git.failing_merges = {"origin/feature-a"}
        without_conflicts = await orchestrator.merge_branch("feature-a")

        fake_git.conflicts = {"origin/feature-a": ["a.txt"]}
        with_conflicts = await orchestrator.merge_branch("feature-a")

        assert without_conflicts.outcome == MergeOutcome.CLEAN
        assert with_conflicts.outcome == MergeOutcome.CONFLICT
        assert with_conflicts.conflicted_paths == ["a.txt"]

    @pytest.mark.asyncio
    async def test_commit_failure_classified(self, orchestrator, fake_git) -> None:
        fake_git.failing_merges = {"origin/feature-a"}
        fake_git.commit_ok = False

        result = await orchestrator.merge_branch("feature-a")

        assert result.outcome == MergeOutcome.COMMIT_FAILED
        assert not result.clean


class TestConflictMessage:
    def test_lists_paths_and_guidance(self) -> None:
        message = conflict_message(
            MergeResult(branch="feature-a", outcome=MergeOutcome.CONFLICT, conflicted_paths=["x.py", "y.py"])
        )

        assert message.splitlines()[:3] == [
            "Merging feature-a stopped with conflicts in:",
            "  x.py",
            "  y.py",
        ]
        assert message.endswith(CONFLICT_GUIDANCE)
