"""Data models for git-integrate."""

from git_integrate.models.domain import MergeResult, RunResult
from git_integrate.models.graphql import LabelBranchesResponse, PullRequestNode

__all__ = [
    "LabelBranchesResponse",
    "MergeResult",
    "PullRequestNode",
    "RunResult",
]
