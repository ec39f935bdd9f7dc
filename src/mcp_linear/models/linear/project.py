"""Linear project model."""

import logging
from typing import Any

from ..base import ApiModel, connection_nodes
from ..constants import EMPTY_STRING, UNKNOWN

logger = logging.getLogger(__name__)


class LinearProject(ApiModel):
    """
    Model representing a Linear project.

    Projects can be shared by several teams, so the owning teams are kept as
    a list of ids rather than a single reference.
    """

    id: str = EMPTY_STRING
    name: str = UNKNOWN
    description: str | None = None
    state: str | None = None
    url: str | None = None
    team_ids: list[str] = []

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearProject":
        """
        Create a LinearProject from a GraphQL ``Project`` node.

        Args:
            data: The project node, optionally with a ``teams`` connection

        Returns:
            A LinearProject instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        team_ids = [
            str(team["id"]) for team in connection_nodes(data.get("teams")) if team.get("id")
        ]

        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or UNKNOWN,
            description=data.get("description"),
            state=data.get("state"),
            url=data.get("url"),
            team_ids=team_ids,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "state": self.state,
            "team_ids": self.team_ids,
        }
