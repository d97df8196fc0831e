"""Branch resolution through the GitHub GraphQL API.

Turns a label into the head branch names of the open pull requests that
carry it, in the order GitHub returns them.
"""

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from git_integrate.exceptions import TransportError
from git_integrate.git.models import RepositoryIdentity
from git_integrate.models.graphql import LabelBranchesResponse

log = structlog.get_logger(__name__)

# A single page; GitHub caps `first` at 100
PAGE_SIZE = 100

LABEL_BRANCHES_QUERY = """
query LabelBranches($owner: String!, $name: String!, $label: String!) {
  repository(owner: $owner, name: $name) {
    pullRequests(first: %d, states: OPEN, labels: [$label]) {
      nodes {
        headRefName
      }
    }
  }
}
""" % (PAGE_SIZE,)


class GitHubBranchResolver:
    """Resolves labelled pull requests to branch names.

    Makes exactly one request per resolve() call and never retries.

    Example:
        >>> resolver = GitHubBranchResolver(token, "https://api.github.com/graphql")
        >>> await resolver.resolve(RepositoryIdentity(owner="o", name="r"), "ready")
        ['feature-a', 'feature-b']
    """

    def __init__(
        self,
        token: str,
        graphql_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            token: Bearer token for the API
            graphql_url: GraphQL endpoint URL
            timeout: Seconds before the request is abandoned, None for no limit
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.token = token.strip()
        self.graphql_url = graphql_url
        self.timeout = timeout
        self._transport = transport

    def build_payload(self, identity: RepositoryIdentity, label: str) -> dict[str, Any]:
        return {
            "query": LABEL_BRANCHES_QUERY,
            "variables": {"owner": identity.owner, "name": identity.name, "label": label},
        }

    async def resolve(self, identity: RepositoryIdentity, label: str) -> list[str]:
        """Head branch names of open pull requests carrying `label`.

        An unknown repository or a label without pull requests resolves to
        an empty list.

        Raises:
            TransportError: On network failure, an error status, a body that
                is not JSON, or JSON that doesn't have the expected shape.
        """
        log.info("resolve_branches", repository=identity.full_name, label=label)

        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.graphql_url,
                    json=self.build_payload(identity, label),
                    headers=headers,
                )
        except httpx.HTTPError as e:
            log.error("graphql_request_failed", url=self.graphql_url, error=str(e))
            raise TransportError(f"Request to {self.graphql_url} failed: {e}") from e

        if response.is_error:
            log.error("graphql_http_error", url=self.graphql_url, status_code=response.status_code)
            raise TransportError(
                f"GitHub API rejected the pull request query for {identity.full_name}",
                status_code=response.status_code,
                response_text=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                "GitHub API returned a response that is not JSON",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

        try:
            parsed = LabelBranchesResponse.model_validate(payload)
        except ValidationError as e:
            raise TransportError(f"Unexpected GitHub API response: {e}") from e

        for error in parsed.errors or []:
            log.warning("graphql_error", repository=identity.full_name, message=error.message, type=error.type)

        branches = parsed.head_ref_names()
        log.info("branches_resolved", repository=identity.full_name, label=label, count=len(branches))
        return branches
