"""Domain models for merge runs.

Nothing here is persisted; results live for a single invocation.
"""

from pydantic import BaseModel, Field

from git_integrate.enums import MergeOutcome, RunState


class MergeResult(BaseModel):
    """Outcome of merging one branch."""

    branch: str
    outcome: MergeOutcome
    conflicted_paths: list[str] = Field(default_factory=list)

    @property
    def clean(self) -> bool:
        return self.outcome == MergeOutcome.CLEAN


class RunResult(BaseModel):
    """Tagged result of a whole run.

    Either a success (`succeeded` is True, state DONE) or a fatal stop
    (state ABORTED) with the reason the operator should see. The CLI turns
    this into the process exit status.

    Attributes:
        succeeded: Whether every branch merged cleanly
        state: Last state reached (DONE or ABORTED)
        reason: Message for the operator on failure
        branch: Branch being merged when the run stopped, if any
        outcome: Merge outcome that stopped the run, if a merge stopped it
        merged: Branches merged cleanly, in merge order
    """

    succeeded: bool
    state: RunState
    reason: str | None = None
    branch: str | None = None
    outcome: MergeOutcome | None = None
    merged: list[str] = Field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    @classmethod
    def success(cls, merged: list[str]) -> "RunResult":
        return cls(succeeded=True, state=RunState.DONE, merged=merged)

    @classmethod
    def fatal(
        cls,
        reason: str,
        merged: list[str] | None = None,
        branch: str | None = None,
        outcome: MergeOutcome | None = None,
    ) -> "RunResult":
        return cls(
            succeeded=False,
            state=RunState.ABORTED,
            reason=reason,
            branch=branch,
            outcome=outcome,
            merged=merged or [],
        )
