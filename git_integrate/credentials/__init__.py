"""Credential lookup for the remote API token.

The token is injected into the run as a plain string; this package is the
only place that knows where it comes from.

Example:
    >>> from git_integrate.credentials import GitConfigBackend, fetch_credential
    >>> token = fetch_credential(GitConfigBackend(repo), "integrate.github-token")
"""

import structlog

from git_integrate.credentials.backend import CredentialBackend
from git_integrate.credentials.git_config_backend import GitConfigBackend, split_config_key
from git_integrate.exceptions import ConfigurationError, CredentialNotFoundError

log = structlog.get_logger(__name__)


def fetch_credential(backend: CredentialBackend, key: str) -> str:
    """Look up a required credential.

    Args:
        backend: Where to look
        key: Key to look up

    Returns:
        The credential with surrounding whitespace removed

    Raises:
        CredentialNotFoundError: If the key is unset or blank
        ConfigurationError: If the key itself is malformed
    """
    try:
        value = backend.get(key)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    if value is None or not value.strip():
        log.debug("credential_missing", backend=backend.name, key=key)
        raise CredentialNotFoundError(
            key,
            suggestion=f"Store a GitHub token with: git config --global {key} <token>",
        )

    return value.strip()


__all__ = [
    "CredentialBackend",
    "GitConfigBackend",
    "fetch_credential",
    "split_config_key",
]
