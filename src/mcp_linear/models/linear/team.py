"""Linear team model."""

from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, UNKNOWN


class LinearTeam(ApiModel):
    id: str = EMPTY_STRING
    name: str = UNKNOWN
    key: str = EMPTY_STRING
    description: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearTeam":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or UNKNOWN,
            key=data.get("key") or EMPTY_STRING,
            description=data.get("description"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "key": self.key,
            "description": self.description,
        }
