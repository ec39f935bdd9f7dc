"""Module for Linear project operations."""

import logging
from typing import Any

from ..models.linear import LinearProject
from .client import LinearClient
from .constants import DEFAULT_PAGE_SIZE
from .filters import build_project_filter

logger = logging.getLogger("mcp-linear.linear")

LIST_PROJECTS_QUERY = """
query Projects($first: Int!, $filter: ProjectFilter) {
  projects(first: $first, filter: $filter) {
    nodes {
      id
      name
      description
      state
      url
      teams { nodes { id } }
    }
  }
}
"""


class ProjectsMixin(LinearClient):
    """Mixin for Linear project operations."""

    def list_projects(
        self, team_id: str | None = None, first: int = DEFAULT_PAGE_SIZE
    ) -> list[LinearProject]:
        """
        List one page of projects.

        Args:
            team_id: Only projects accessible to this team
            first: Page size

        Returns:
            List of LinearProject with their team ids
        """
        variables: dict[str, Any] = {"first": first}
        project_filter = build_project_filter(team_id)
        if project_filter:
            variables["filter"] = project_filter

        data = self.execute(LIST_PROJECTS_QUERY, variables)
        nodes = (data.get("projects") or {}).get("nodes") or []
        return [LinearProject.from_api_response(node) for node in nodes]
