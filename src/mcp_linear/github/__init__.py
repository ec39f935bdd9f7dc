"""GitHub API module for mcp_linear.

This module provides the GitHub REST client implementation.
"""

from .branches import BranchesMixin
from .client import GitHubClient
from .compare import CompareMixin
from .config import GitHubConfig, is_github_enabled
from .pull_requests import PullRequestsMixin


class GitHubFetcher(
    BranchesMixin,
    PullRequestsMixin,
    CompareMixin,
):
    """
    The main GitHub client class providing access to all GitHub operations.

    This class inherits from multiple mixins that provide specific functionality:
    - BranchesMixin: Branch creation
    - PullRequestsMixin: Pull request create/update/get and Linear linking
    - CompareMixin: Ref comparison, merged PRs and release titles
    """

    pass


__all__ = [
    "GitHubClient",
    "GitHubConfig",
    "GitHubFetcher",
    "is_github_enabled",
]
