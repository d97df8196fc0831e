"""Custom exception hierarchy for git-integrate.

This module defines a structured exception hierarchy that lets the CLI
boundary tell configuration problems, git failures and remote API failures
apart while still catching everything with a single except clause.

Exception Hierarchy:
    IntegrateError (base)
    ├── ConfigurationError
    │   └── CredentialNotFoundError
    ├── GitOperationError
    │   ├── GitCommandError
    │   └── GitDiscoveryError (see git_integrate.git.exceptions)
    └── ExternalServiceError
        └── TransportError

Example Usage:
    >>> from git_integrate.exceptions import ConfigurationError
    >>> try:
    ...     settings = IntegrateSettings()
    ... except ValidationError as e:
    ...     raise ConfigurationError(f"Invalid configuration: {e}") from e
"""


class IntegrateError(Exception):
    """Base exception for all git-integrate errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(IntegrateError):
    """Configuration-related errors.

    Raised before any repository mutation happens, when the run cannot be
    set up.

    Examples:
        - Invalid INTEGRATE_* environment values
        - Base branch cannot be determined
        - Required credential missing from git config
    """

    pass


class CredentialNotFoundError(ConfigurationError):
    """A required credential is absent from the configuration store.

    Attributes:
        key: The configuration key that was looked up
        suggestion: Optional suggestion for resolution
    """

    def __init__(self, key: str, suggestion: str | None = None) -> None:
        """Initialize exception.

        Args:
            key: The configuration key that was looked up
            suggestion: Optional suggestion for resolution
        """
        self.key = key
        self.suggestion = suggestion

        message = f"Could not find {key} in any git configuration file"
        if suggestion:
            message = f"{message}\nSuggestion: {suggestion}"
        super().__init__(message)


class GitOperationError(IntegrateError):
    """Git operation errors.

    Base class for failures talking to git itself. See
    git_integrate.git.exceptions for discovery-specific subclasses.
    """

    pass


class GitCommandError(GitOperationError):
    """A git subprocess could not be started at all.

    A git command that runs and exits non-zero is not an exception; it is
    reported as a failed operation. This error covers the cases where no
    exit status exists (missing executable, permission denied).

    Attributes:
        command: The git arguments that were attempted
    """

    def __init__(self, command: list[str], reason: str) -> None:
        """Initialize exception.

        Args:
            command: Git arguments (without the leading "git")
            reason: Why the command could not be run
        """
        self.command = command
        super().__init__(f"Could not run 'git {' '.join(command)}': {reason}")


class ExternalServiceError(IntegrateError):
    """External service communication errors.

    Raised when communication with the remote API fails.

    Examples:
        - HTTP request failed
        - API returned an error status
        - Service timeout
        - Network connectivity issue
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            status_code: HTTP status code (if applicable)
            response_text: Response body text (if applicable)
        """
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)


class TransportError(ExternalServiceError):
    """The pull request query could not be completed or understood.

    Covers transport failures, error statuses, undecodable payloads and
    payloads that do not match the expected response shape. Never retried.
    """

    pass
