"""Response shapes of the labelled pull request query.

Every level may be null or missing: GitHub answers `repository: null` for
an unknown repository, and individual nodes or head refs can be null when
the head repository was deleted.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class PullRequestNode(_Node):
    head_ref_name: str | None = Field(default=None, alias="headRefName")


class PullRequestConnection(_Node):
    nodes: list[PullRequestNode | None] | None = None


class RepositoryNode(_Node):
    pull_requests: PullRequestConnection | None = Field(default=None, alias="pullRequests")


class LabelBranchesData(_Node):
    repository: RepositoryNode | None = None


class GraphQLError(_Node):
    message: str = ""
    type: str | None = None


class LabelBranchesResponse(_Node):
    """Top-level GraphQL response body."""

    data: LabelBranchesData | None = None
    errors: list[GraphQLError] | None = None

    def head_ref_names(self) -> list[str]:
        """Head branch names in response order.

        Missing levels count as empty; nodes without a head ref are skipped.
        """
        if self.data is None or self.data.repository is None:
            return []

        connection = self.data.repository.pull_requests
        if connection is None or connection.nodes is None:
            return []

        return [node.head_ref_name for node in connection.nodes if node is not None and node.head_ref_name]
