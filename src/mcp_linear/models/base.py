"""
Base models shared by the Linear and GitHub result types.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for remote API results.

    Subclasses adapt a raw API payload with ``from_api_response`` and
    produce the flattened tool response with ``to_simplified_dict``.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """
        Create a model instance from an API response.

        Args:
            data: The raw API response data
            **kwargs: Additional context parameters

        Returns:
            An instance of the model
        """
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """
        Convert the model to a simplified dictionary for API responses.

        Returns:
            A dictionary with only the essential fields
        """
        return self.model_dump(exclude_none=True)


def connection_nodes(value: Any) -> list[dict[str, Any]]:
    """Return the ``nodes`` of a GraphQL connection, tolerating a bare list or None."""
    if isinstance(value, dict):
        nodes = value.get("nodes") or []
    elif isinstance(value, list):
        nodes = value
    else:
        return []
    return [node for node in nodes if isinstance(node, dict)]
