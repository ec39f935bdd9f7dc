"""
Linear reference models.

Small records that hang off an issue: users, workflow states, labels,
comments, attachments, cycles and parent references.
"""

import logging
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, UNKNOWN

logger = logging.getLogger(__name__)


class LinearUser(ApiModel):
    """A Linear user (assignee, creator or comment author)."""

    id: str = EMPTY_STRING
    name: str = UNKNOWN
    email: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearUser":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("displayName") or data.get("name") or UNKNOWN,
            email=data.get("email"),
        )


class LinearState(ApiModel):
    """A workflow state such as "Todo" or "In Progress"."""

    id: str = EMPTY_STRING
    name: str = UNKNOWN
    type: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearState":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or UNKNOWN,
            type=data.get("type"),
        )


class LinearLabel(ApiModel):
    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    color: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearLabel":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name", EMPTY_STRING),
            color=data.get("color"),
        )


class LinearComment(ApiModel):
    """A comment on an issue; the author is flattened to a display name."""

    id: str = EMPTY_STRING
    body: str = EMPTY_STRING
    created_at: str | None = None
    author: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearComment":
        if not data or not isinstance(data, dict):
            return cls()

        author = None
        if isinstance(user := data.get("user"), dict):
            author = LinearUser.from_api_response(user).name

        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            body=data.get("body") or EMPTY_STRING,
            created_at=data.get("createdAt"),
            author=author,
        )


class LinearAttachment(ApiModel):
    id: str = EMPTY_STRING
    title: str | None = None
    url: str = EMPTY_STRING

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearAttachment":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            title=data.get("title"),
            url=data.get("url") or EMPTY_STRING,
        )


class LinearCycle(ApiModel):
    """A cycle (sprint). Unnamed cycles are dropped by ``from_api_response``."""

    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    number: int | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearCycle | None":  # type: ignore[override]
        if not data or not isinstance(data, dict) or not data.get("name"):
            return None
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data["name"],
            number=data.get("number"),
        )


class LinearIssueRef(ApiModel):
    """A one-hop reference to another issue (e.g. the parent)."""

    id: str = EMPTY_STRING
    identifier: str | None = None
    title: str = EMPTY_STRING

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "LinearIssueRef":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            identifier=data.get("identifier"),
            title=data.get("title") or EMPTY_STRING,
        )
