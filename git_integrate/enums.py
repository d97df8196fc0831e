"""Enumerations for git-integrate run states and merge outcomes."""

from enum import Enum


class MergeOutcome(str, Enum):
    """Classification of one attempted branch merge.

    - clean: merged, either directly or after a finalizing commit
    - conflict: conflicted paths left for the operator to resolve
    - commit-failed: merge failed without conflicts and the finalizing
      commit failed too
    """

    CLEAN = "clean"
    CONFLICT = "conflict"
    COMMIT_FAILED = "commit-failed"

    def __str__(self) -> str:
        return self.value


class RunState(str, Enum):
    """States of a merge run, in the order a successful run visits them."""

    START = "start"
    FETCHED = "fetched"
    ON_DESTINATION_BRANCH = "on-destination-branch"
    RESOLVING = "resolving"
    MERGING_BRANCH = "merging-branch"
    DONE = "done"
    ABORTED = "aborted"

    def __str__(self) -> str:
        return self.value
