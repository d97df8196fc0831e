"""Abstract backend protocol for credential lookup."""

from typing import Protocol


class CredentialBackend(Protocol):
    """Protocol defining the interface for credential sources.

    Backends are read-only: the run only ever looks a credential up.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'git-config')."""
        ...

    def get(self, key: str) -> str | None:
        """Retrieve a credential.

        Args:
            key: Backend-specific key (e.g., 'integrate.github-token')

        Returns:
            Credential value or None if not found
        """
        ...
