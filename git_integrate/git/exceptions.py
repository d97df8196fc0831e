"""Git discovery exceptions.

All exceptions inherit from GitDiscoveryError and carry a hint telling the
operator how to fix the checkout before re-running.

Example:
    >>> from git_integrate.git.exceptions import NotGitRepositoryError
    >>> raise NotGitRepositoryError("/tmp/not-a-repo")
    Traceback (most recent call last):
        ...
    NotGitRepositoryError: Not a Git repository: /tmp/not-a-repo

    Hint: Run git-integrate from inside a clone of the repository.
"""

from git_integrate.exceptions import GitOperationError


class GitDiscoveryError(GitOperationError):
    """Base exception for Git discovery errors.

    Attributes:
        message: Error message
        hint: Optional hint for resolution
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message


class NotGitRepositoryError(GitDiscoveryError):
    """Raised when the working directory is not inside a Git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Not a Git repository: {path}",
            hint="Run git-integrate from inside a clone of the repository.",
        )
        self.path = path


class NoRemotesError(GitDiscoveryError):
    """Raised when repository has no remotes configured."""

    def __init__(self) -> None:
        super().__init__(
            message="No Git remotes configured in this repository",
            hint="Add a remote with: git remote add origin <url>",
        )


class RemoteNotFoundError(GitDiscoveryError):
    """Raised when the configured remote does not exist.

    Attributes:
        remote_name: The remote that was requested
        available: Names of the remotes that do exist
    """

    def __init__(self, remote_name: str, available: list[str]) -> None:
        super().__init__(
            message=f"Remote '{remote_name}' not found. Available: {', '.join(available)}",
            hint="Set INTEGRATE_REMOTE to the remote that points at the pull request repository.",
        )
        self.remote_name = remote_name
        self.available = available


class InvalidGitUrlError(GitDiscoveryError):
    """Raised when a remote URL format is not recognized.

    Attributes:
        url: The invalid URL
    """

    def __init__(self, url: str, reason: str | None = None) -> None:
        msg = f"Invalid Git URL format: {url}"
        if reason:
            msg += f" ({reason})"

        super().__init__(
            message=msg,
            hint=(
                "Expected formats:\n"
                "  - git@github.com:owner/repo.git\n"
                "  - https://github.com/owner/repo.git"
            ),
        )
        self.url = url
