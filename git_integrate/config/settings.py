"""
Configuration system using Pydantic for type-safe settings management.

git-integrate takes no command-line flags besides its two arguments; the
few knobs it has come from INTEGRATE_* environment variables and an
optional `git-integrate.yaml` file inside the repository's git directory
(`.git/git-integrate.yaml`). Values in the file take precedence over the
environment. Nothing is read from the working tree, which holds the pull
request content being merged.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from git_integrate.exceptions import ConfigurationError

CONFIG_FILE_NAME = "git-integrate.yaml"
DEFAULT_TOKEN_KEY = "integrate.github-token"
FALLBACK_BASE_BRANCH = "master"


class IntegrateSettings(BaseSettings):
    """Settings for a git-integrate run.

    Example:
        >>> settings = IntegrateSettings.load(Path("/path/to/clone"))
        >>> settings.remote
        'origin'
    """

    model_config = SettingsConfigDict(
        env_prefix="INTEGRATE_",
        case_sensitive=False,
        extra="forbid",
    )

    remote: str = Field(default="origin", description="Remote that pull request branches are fetched from")
    base_branch: str | None = Field(
        default=None,
        description="Branch of the remote the destination is reset to (default: the remote's HEAD)",
    )
    token_key: str = Field(default=DEFAULT_TOKEN_KEY, description="git config key holding the GitHub token")
    graphql_url: str | None = Field(
        default=None,
        description="GraphQL endpoint (default: derived from the remote host)",
    )
    http_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before the API call is abandoned (default: no limit)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING")
    json_logs: bool = Field(default=False, description="Emit JSON log lines instead of console output")

    @field_validator("remote", "token_key")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    def resolve_base_branch(self, remote_head: str | None) -> str:
        """Pick the branch the destination branch starts from.

        Args:
            remote_head: Default branch recorded for the remote, if any

        Returns:
            Explicit setting, else the remote's default branch, else 'master'
        """
        return self.base_branch or remote_head or FALLBACK_BASE_BRANCH

    @classmethod
    def load(cls, config_dir: Path | None = None) -> IntegrateSettings:
        """Load settings from the environment and optional config file.

        Args:
            config_dir: Git directory of the repository (`.git`) to look
                for git-integrate.yaml in. None skips the file.

        Returns:
            IntegrateSettings instance

        Raises:
            ConfigurationError: If the file is unreadable or any value is invalid
        """
        file_values: dict[str, object] = {}
        if config_dir is not None:
            config_file = config_dir / CONFIG_FILE_NAME
            if config_file.exists():
                file_values = cls._read_yaml(config_file)

        try:
            return cls(**file_values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _read_yaml(config_file: Path) -> dict[str, object]:
        try:
            content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_file}") from e

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_file}: {e}") from e

        if config_dict is None:
            return {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")
        return config_dict
