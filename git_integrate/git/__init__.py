"""Git repository discovery, URL parsing and command execution.

Example:
    >>> from git_integrate.git import GitDiscovery
    >>> discovery = GitDiscovery()
    >>> identity = discovery.repository_identity("origin")
    >>> print(identity.full_name)
    owner/repo

Error Handling:
    Discovery exceptions inherit from GitDiscoveryError and include a hint.

    >>> from git_integrate.git import GitDiscovery, NoRemotesError
    >>> try:
    ...     GitDiscovery().repository_identity("origin")
    ... except NoRemotesError as e:
    ...     print(e)
    No Git remotes configured in this repository

    Hint: Add a remote with: git remote add origin <url>
"""

from git_integrate.git.discovery import GitDiscovery
from git_integrate.git.exceptions import (
    GitDiscoveryError,
    InvalidGitUrlError,
    NoRemotesError,
    NotGitRepositoryError,
    RemoteNotFoundError,
)
from git_integrate.git.models import GitRemote, RepositoryIdentity
from git_integrate.git.operations import GitOperations, SubprocessGitOperations, run_git
from git_integrate.git.parser import GitUrlParser

__all__ = [
    # Discovery
    "GitDiscovery",
    # Parser
    "GitUrlParser",
    # Operations
    "GitOperations",
    "SubprocessGitOperations",
    "run_git",
    # Models
    "GitRemote",
    "RepositoryIdentity",
    # Exceptions
    "GitDiscoveryError",
    "NotGitRepositoryError",
    "NoRemotesError",
    "RemoteNotFoundError",
    "InvalidGitUrlError",
]
