"""Merge run orchestration."""

from git_integrate.engine.orchestrator import (
    CONFLICT_GUIDANCE,
    BranchResolver,
    MergeOrchestrator,
    conflict_message,
)

__all__ = [
    "BranchResolver",
    "CONFLICT_GUIDANCE",
    "MergeOrchestrator",
    "conflict_message",
]
