"""Configuration for git-integrate."""

from git_integrate.config.settings import (
    CONFIG_FILE_NAME,
    DEFAULT_TOKEN_KEY,
    FALLBACK_BASE_BRANCH,
    IntegrateSettings,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_TOKEN_KEY",
    "FALLBACK_BASE_BRANCH",
    "IntegrateSettings",
]
