"""Git configuration backend.

Reads credentials from git's own configuration store, so a token can be
stored once with `git config --global integrate.github-token <token>`.
"""

import git
import structlog

log = structlog.get_logger(__name__)


def split_config_key(key: str) -> tuple[str, str]:
    """Split a dotted git config key into (section, option).

    Subsections are quoted the way they appear in a config file:

        >>> split_config_key("integrate.github-token")
        ('integrate', 'github-token')
        >>> split_config_key("integrate.github.com.token")
        ('integrate "github.com"', 'token')

    Raises:
        ValueError: If the key has no section part.
    """
    section, dot, option = key.rpartition(".")
    if not dot or not section or not option:
        raise ValueError(f"Invalid git config key '{key}': expected section.option")

    name, dot, subsection = section.partition(".")
    if dot:
        return f'{name} "{subsection}"', option
    return name, option


class GitConfigBackend:
    """Credential lookup in git configuration files.

    All levels git itself reads are consulted (system, global, repository);
    the most specific level wins.

    Example:
        >>> backend = GitConfigBackend(git.Repo("."))
        >>> token = backend.get("integrate.github-token")
    """

    def __init__(self, repo: git.Repo) -> None:
        self._repo = repo

    @property
    def name(self) -> str:
        return "git-config"

    def get(self, key: str) -> str | None:
        """Retrieve a value from git config.

        Args:
            key: Dotted key such as 'integrate.github-token'

        Returns:
            The raw string value, or None if the key is not set
        """
        section, option = split_config_key(key)

        with self._repo.config_reader() as reader:
            if not reader.has_option(section, option):
                return None
            value = reader.get(section, option)

        log.debug("credential_found", backend=self.name, key=key)
        return str(value)
