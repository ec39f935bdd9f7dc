"""Linear API module for mcp_linear.

This module provides the Linear GraphQL client implementation.
"""

from .client import LinearClient
from .config import LinearConfig
from .issues import IssuesMixin
from .projects import ProjectsMixin
from .teams import TeamsMixin


class LinearFetcher(
    IssuesMixin,
    TeamsMixin,
    ProjectsMixin,
):
    """
    The main Linear client class providing access to all Linear operations.

    This class inherits from multiple mixins that provide specific functionality:
    - IssuesMixin: Issue create/read/update, listing and search
    - TeamsMixin: Team listing
    - ProjectsMixin: Project listing
    """

    pass


__all__ = [
    "LinearClient",
    "LinearConfig",
    "LinearFetcher",
]
