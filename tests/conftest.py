"""Pytest configuration and shared fixtures."""

import os
from dataclasses import dataclass, field

import pytest
import structlog

from git_integrate.exceptions import IntegrateError
from git_integrate.git.models import RepositoryIdentity


@dataclass
class FakeGitOperations:
    """In-memory GitOperations that records every call.

    Merges succeed unless the ref is listed in `failing_merges`; a failing
    merge leaves the paths given in `conflicts` for that ref.
    """

    fetch_ok: bool = True
    reset_ok: bool = True
    commit_ok: bool = True
    failing_merges: set[str] = field(default_factory=set)
    conflicts: dict[str, list[str]] = field(default_factory=dict)
    calls: list[tuple[str, ...]] = field(default_factory=list)
    _last_merge: str | None = None

    async def fetch_all(self) -> bool:
        self.calls.append(("fetch_all",))
        return self.fetch_ok

    async def reset_branch(self, branch: str, start_point: str) -> bool:
        self.calls.append(("reset_branch", branch, start_point))
        return self.reset_ok

    async def merge(self, ref: str) -> bool:
        self.calls.append(("merge", ref))
        self._last_merge = ref
        return ref not in self.failing_merges

    async def commit(self) -> bool:
        self.calls.append(("commit",))
        return self.commit_ok

    async def conflicted_paths(self) -> list[str]:
        self.calls.append(("conflicted_paths",))
        return list(self.conflicts.get(self._last_merge or "", []))

    @property
    def merged_refs(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "merge"]


@dataclass
class FakeResolver:
    """BranchResolver returning a fixed sequence (or raising)."""

    branches: list[str] = field(default_factory=list)
    error: IntegrateError | None = None
    calls: list[tuple[RepositoryIdentity, str]] = field(default_factory=list)

    async def resolve(self, identity: RepositoryIdentity, label: str) -> list[str]:
        self.calls.append((identity, label))
        if self.error is not None:
            raise self.error
        return list(self.branches)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test (or the CLI under test) applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep INTEGRATE_* variables from the developer shell out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("INTEGRATE_"):
            monkeypatch.delenv(name)


@pytest.fixture
def identity() -> RepositoryIdentity:
    """Repository identity used across tests."""
    return RepositoryIdentity(owner="acme", name="widgets")


@pytest.fixture
def fake_git() -> FakeGitOperations:
    return FakeGitOperations()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()
