"""Git repository discovery.

Locates the local checkout, selects the remote pull requests are opened
against and derives the repository identity and default branch from it.
Nothing in this module runs a git subprocess; GitPython reads the
repository files directly.

Example:
    >>> from git_integrate.git.discovery import GitDiscovery
    >>> discovery = GitDiscovery()
    >>> identity = discovery.repository_identity("origin")
    >>> print(identity.full_name)
    owner/repo
    >>> discovery.default_branch("origin")
    'main'

Dependencies:
    Requires GitPython (gitpython) package for repository access.
"""

from pathlib import Path
from typing import Literal

import git
import structlog
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from git_integrate.git.exceptions import (
    NoRemotesError,
    NotGitRepositoryError,
    RemoteNotFoundError,
)
from git_integrate.git.models import GitRemote, RepositoryIdentity
from git_integrate.git.parser import GitUrlParser

log = structlog.get_logger(__name__)


class GitDiscovery:
    """Discovers Git repository configuration from the local checkout.

    The git.Repo object is created lazily on first access, so constructing
    a GitDiscovery never fails; validation happens on first use.

    Attributes:
        repo_path: Resolved absolute path the search starts from.
    """

    def __init__(self, repo_path: str | Path = ".") -> None:
        """Initialize Git discovery for a repository path.

        Args:
            repo_path: Any path inside the repository. Parent directories
                are searched automatically. Default is current directory.
        """
        self.repo_path = Path(repo_path).resolve()
        self._repo: git.Repo | None = None

    @property
    def repo(self) -> git.Repo:
        """The GitPython repository object, opened on first access.

        Raises:
            NotGitRepositoryError: If the path is not within a Git repository.
        """
        if self._repo is None:
            try:
                self._repo = git.Repo(self.repo_path, search_parent_directories=True)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise NotGitRepositoryError(str(self.repo_path)) from e

        return self._repo

    @property
    def working_dir(self) -> Path:
        """Top-level directory of the working tree."""
        return Path(self.repo.working_tree_dir or self.repo_path)

    @property
    def git_dir(self) -> Path:
        """Git directory shared by every worktree of the repository."""
        return Path(self.repo.common_dir)

    def list_remotes(self) -> list[GitRemote]:
        """List all configured Git remotes.

        Example:
            >>> for remote in GitDiscovery().list_remotes():
            ...     print(f"{remote.name}: {remote.url} ({remote.url_type})")
            origin: git@github.com:owner/repo.git (ssh)
        """
        remotes = []
        for remote in self.repo.remotes:
            url = remote.url

            url_type: Literal["ssh", "https", "unknown"] = "unknown"
            if url.startswith(("git@", "ssh://")):
                url_type = "ssh"
            elif url.startswith(("http://", "https://")):
                url_type = "https"

            remotes.append(GitRemote(name=remote.name, url=url, url_type=url_type))

        return remotes

    def get_remote(self, remote_name: str) -> GitRemote:
        """Get a Git remote by name.

        Raises:
            NotGitRepositoryError: If not within a Git repository.
            NoRemotesError: If no remotes are configured.
            RemoteNotFoundError: If the named remote doesn't exist.
        """
        remotes = self.list_remotes()

        if not remotes:
            raise NoRemotesError()

        for remote in remotes:
            if remote.name == remote_name:
                return remote

        raise RemoteNotFoundError(remote_name, [r.name for r in remotes])

    def parse_remote(self, remote_name: str) -> GitUrlParser:
        """Parse the URL of a remote.

        Raises:
            InvalidGitUrlError: If the remote URL format is invalid.
        """
        return GitUrlParser(self.get_remote(remote_name).url)

    def repository_identity(self, remote_name: str) -> RepositoryIdentity:
        """Derive the owner and name of the repository behind a remote.

        Args:
            remote_name: Remote to read the URL from (usually 'origin').

        Returns:
            Immutable RepositoryIdentity.

        Raises:
            NotGitRepositoryError: If not within a Git repository.
            NoRemotesError: If no remotes are configured.
            RemoteNotFoundError: If the named remote doesn't exist.
            InvalidGitUrlError: If the remote URL format is invalid.
        """
        parser = self.parse_remote(remote_name)
        identity = RepositoryIdentity(owner=parser.owner, name=parser.repo)
        log.debug("repository_identity", remote=remote_name, repository=identity.full_name)
        return identity

    def default_branch(self, remote_name: str) -> str | None:
        """Short name of the remote's default branch.

        Read from the refs/remotes/<remote>/HEAD symbolic ref that git
        records on clone (or on `git remote set-head <remote> --auto`).

        Returns:
            Branch name such as 'main', or None if the symbolic ref is
            missing or does not point at a branch of that remote.
        """
        prefix = f"refs/remotes/{remote_name}/"
        head = git.SymbolicReference(self.repo, f"{prefix}HEAD")

        try:
            target = head.reference.path
        except (TypeError, ValueError):
            log.debug("remote_head_missing", remote=remote_name)
            return None

        if not target.startswith(prefix):
            return None
        return target[len(prefix) :]
