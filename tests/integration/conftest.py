"""Pytest fixtures for integration tests.

A bare repository stands in for the remote and a clone of it is the
checkout git-integrate runs in. Branches on the remote:

- main: base.txt
- feature-a, feature-b: each add their own file
- conflict-1, conflict-2: rewrite the same line of base.txt
"""

from __future__ import annotations

from pathlib import Path

import git
import pytest


def _configure_identity(repo: git.Repo) -> None:
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Integration Test")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")


def _commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    Path(repo.working_tree_dir, name).write_text(content)
    repo.git.add(name)
    repo.git.commit("-m", message)


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """Bare repository populated with the branches described above."""
    seed = git.Repo.init(tmp_path / "seed")
    _configure_identity(seed)
    _commit_file(seed, "base.txt", "base\n", "Initial commit")
    seed.git.branch("-M", "main")

    for branch, name, content in [
        ("feature-a", "a.txt", "a\n"),
        ("feature-b", "b.txt", "b\n"),
        ("conflict-1", "base.txt", "one\n"),
        ("conflict-2", "base.txt", "two\n"),
    ]:
        seed.git.checkout("-b", branch, "main")
        _commit_file(seed, name, content, f"Change {name} on {branch}")

    bare_path = tmp_path / "remote.git"
    bare = git.Repo.init(bare_path, bare=True)
    bare.git.symbolic_ref("HEAD", "refs/heads/main")
    seed.create_remote("origin", str(bare_path))
    seed.git.push("origin", "--all")
    return bare_path


@pytest.fixture
def clone(tmp_path: Path, remote_repo: Path) -> git.Repo:
    """Working clone of the remote with an identity configured."""
    repo = git.Repo.clone_from(str(remote_repo), tmp_path / "clone")
    _configure_identity(repo)
    return repo


@pytest.fixture
def install_hook(clone: git.Repo):
    """Install a shell hook in the clone that exits with a fixed status."""

    def install(name: str, exit_status: int) -> None:
        hook = Path(clone.git_dir, "hooks", name)
        hook.parent.mkdir(exist_ok=True)
        hook.write_text(f"#!/bin/sh\nexit {exit_status}\n")
        hook.chmod(0o755)

    return install
