"""Git repository data models.

Example:
    >>> from git_integrate.git.models import RepositoryIdentity
    >>> identity = RepositoryIdentity(owner="myorg", name="myrepo.git")
    >>> identity.full_name
    'myorg/myrepo'
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


@dataclass(frozen=True)
class GitRemote:
    """Represents a Git remote configuration.

    Attributes:
        name: Remote name (e.g., 'origin', 'upstream')
        url: Raw URL from git config
        url_type: Whether SSH or HTTPS format
    """

    name: str
    url: str
    url_type: Literal["ssh", "https", "unknown"]


class RepositoryIdentity(BaseModel):
    """Owner and name of the repository the pull requests live in.

    Derived once from the remote URL and never changed afterwards.

    Attributes:
        owner: Repository owner/organization
        name: Repository name (without .git suffix)
    """

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @field_validator("owner", "name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Ensure owner and name are not empty."""
        if not v or not v.strip():
            raise ValueError("Owner and name must not be empty")
        return v.strip()

    @field_validator("name")
    @classmethod
    def validate_no_git_suffix(cls, v: str) -> str:
        return v.removesuffix(".git")

    @property
    def full_name(self) -> str:
        """Return owner/name format."""
        return f"{self.owner}/{self.name}"
