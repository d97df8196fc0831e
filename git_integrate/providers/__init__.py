"""Remote API providers."""

from git_integrate.providers.github_graphql import LABEL_BRANCHES_QUERY, GitHubBranchResolver

__all__ = ["GitHubBranchResolver", "LABEL_BRANCHES_QUERY"]
