"""Module for Linear team operations."""

import logging

from ..models.linear import LinearTeam
from .client import LinearClient

logger = logging.getLogger("mcp-linear.linear")

LIST_TEAMS_QUERY = """
query Teams {
  teams {
    nodes { id name key description }
  }
}
"""


class TeamsMixin(LinearClient):
    """Mixin for Linear team operations."""

    def list_teams(self) -> list[LinearTeam]:
        """
        List every team the API key can see.

        Returns:
            List of LinearTeam
        """
        data = self.execute(LIST_TEAMS_QUERY)
        nodes = (data.get("teams") or {}).get("nodes") or []
        logger.debug(f"Fetched {len(nodes)} teams")
        return [LinearTeam.from_api_response(node) for node in nodes]
