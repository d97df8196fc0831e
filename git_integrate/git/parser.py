"""Git URL parsing utilities.

This module extracts the host, owner and repository name from a remote URL
so the repository can be looked up through the GitHub GraphQL API.

Supported URL formats:
    SSH:
        - git@github.com:owner/repo.git
        - git@github.com:owner/repo
        - user@github.example.com:owner/repo.git
        - ssh://git@github.com/owner/repo.git

    HTTPS:
        - https://github.com/owner/repo.git
        - https://github.com/owner/repo
        - https://user@github.com/owner/repo.git
        - https://github.example.com:8443/owner/repo.git

Example:
    >>> from git_integrate.git.parser import GitUrlParser
    >>> parser = GitUrlParser("git@github.com:owner/repo.git")
    >>> parser.owner, parser.repo
    ('owner', 'repo')
    >>> parser.graphql_url
    'https://api.github.com/graphql'
"""

import re
from typing import Literal

from git_integrate.git.exceptions import InvalidGitUrlError

GITHUB_HOST = "github.com"
GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"


class GitUrlParser:
    """Parser for Git URLs in SSH and HTTPS formats.

    All properties return valid values after successful initialization.
    If parsing fails, the constructor raises InvalidGitUrlError.

    Attributes:
        url: Original URL that was parsed (whitespace trimmed).

    Example:
        >>> parser = GitUrlParser("https://github.example.com:3000/myorg/myrepo.git")
        >>> parser.url_type
        'https'
        >>> parser.port
        3000
        >>> parser.base_url
        'https://github.example.com:3000'
        >>> parser.graphql_url
        'https://github.example.com:3000/api/graphql'
    """

    # git@host:path; requires user@ so https:// URLs never match
    SCP_PATTERN = re.compile(r"^(?P<user>[\w.-]+)@(?P<host>[a-zA-Z0-9._-]+):(?!//)(?P<path>.+?)(?:\.git)?/?$")

    # ssh://[user@]host[:port]/path
    SSH_URL_PATTERN = re.compile(
        r"^ssh://(?:[\w.-]+@)?(?P<host>[a-zA-Z0-9._-]+)(?::(?P<port>\d+))?/(?P<path>.+?)(?:\.git)?/?$"
    )

    # http(s)://[userinfo@]host[:port]/path
    HTTPS_PATTERN = re.compile(
        r"^https?://(?:[^@/]+@)?(?P<host>[a-zA-Z0-9._-]+)(?::(?P<port>\d+))?/(?P<path>.+?)(?:\.git)?/?$"
    )

    def __init__(self, url: str) -> None:
        self.url = url.strip()
        self._url_type: Literal["ssh", "https", "unknown"] = "unknown"
        self._host: str | None = None
        self._port: int | None = None
        self._owner: str | None = None
        self._repo: str | None = None

        self._parse()

    def _parse(self) -> None:
        """Try SSH forms first, then HTTPS."""
        match = self.SCP_PATTERN.match(self.url)
        if match:
            self._url_type = "ssh"
            self._host = match.group("host")
            self._extract_owner_repo(match.group("path"))
            return

        match = self.SSH_URL_PATTERN.match(self.url)
        if match:
            # ssh ports are not API ports; drop them
            self._url_type = "ssh"
            self._host = match.group("host")
            self._extract_owner_repo(match.group("path"))
            return

        match = self.HTTPS_PATTERN.match(self.url)
        if match:
            self._url_type = "https"
            self._host = match.group("host")
            port = match.group("port")
            self._port = int(port) if port else None
            self._extract_owner_repo(match.group("path"))
            return

        raise InvalidGitUrlError(
            self.url,
            reason="Must be SSH (git@host:path) or HTTPS (https://host/path)",
        )

    def _extract_owner_repo(self, path: str) -> None:
        """Take the first two path components as owner and repo.

        Raises:
            InvalidGitUrlError: If path doesn't contain owner/repo.
        """
        path = path.strip("/").removesuffix(".git")
        parts = path.split("/")

        if len(parts) < 2:
            raise InvalidGitUrlError(self.url, reason=f"Path must contain owner/repo (got: {path})")

        self._owner = parts[0]
        self._repo = parts[1]

        if not self._owner or not self._repo:
            raise InvalidGitUrlError(self.url, reason="Owner and repo must not be empty")

    @property
    def url_type(self) -> Literal["ssh", "https", "unknown"]:
        return self._url_type

    @property
    def host(self) -> str:
        if self._host is None:
            raise ValueError("URL not parsed")
        return self._host

    @property
    def port(self) -> int | None:
        """Port number for HTTPS URLs with a non-standard port, else None."""
        return self._port

    @property
    def owner(self) -> str:
        if self._owner is None:
            raise ValueError("URL not parsed")
        return self._owner

    @property
    def repo(self) -> str:
        if self._repo is None:
            raise ValueError("URL not parsed")
        return self._repo

    @property
    def base_url(self) -> str:
        """Base web URL, always HTTPS, including the port if one was given."""
        if self._port:
            return f"https://{self.host}:{self._port}"
        return f"https://{self.host}"

    @property
    def graphql_url(self) -> str:
        """GraphQL endpoint serving this host.

        github.com is served from api.github.com; GitHub Enterprise Server
        exposes the endpoint under /api/graphql on its own host.
        """
        if self.host.lower() == GITHUB_HOST:
            return GITHUB_GRAPHQL_URL
        return f"{self.base_url}/api/graphql"
