"""
Linear issue models.

This module provides the Pydantic model for Linear issues and the two
flattened shapes handed back to tools: the list summary and the full
detail record.
"""

import logging
from typing import Any

from ..base import ApiModel, connection_nodes
from ..constants import EMPTY_STRING, UNASSIGNED, UNKNOWN
from .common import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearIssueRef,
    LinearLabel,
    LinearState,
    LinearUser,
)
from .project import LinearProject
from .team import LinearTeam

logger = logging.getLogger(__name__)

PRIORITY_LABELS = {
    0: "No priority",
    1: "Urgent",
    2: "High",
    3: "Medium",
    4: "Low",
}


class LinearIssue(ApiModel):
    """
    Model representing a Linear issue.

    References (state, assignee, team, ...) are optional because list
    queries only select a subset of them.
    """

    id: str = EMPTY_STRING
    identifier: str = EMPTY_STRING
    title: str = EMPTY_STRING
    description: str | None = None
    priority: int | None = None
    priority_label: str | None = None
    url: str | None = None
    branch_name: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    started_at: str | None = None
    completed_at: str | None = None
    canceled_at: str | None = None
    due_date: str | None = None
    estimate: float | None = None
    state: LinearState | None = None
    assignee: LinearUser | None = None
    creator: LinearUser | None = None
    team: LinearTeam | None = None
    project: LinearProject | None = None
    parent: LinearIssueRef | None = None
    cycle: LinearCycle | None = None
    labels: list[LinearLabel] = []
    comments: list[LinearComment] = []
    attachments: list[LinearAttachment] = []
    metadata: dict[str, Any] | None = None

    @property
    def status(self) -> str:
        return self.state.name if self.state else UNKNOWN

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "LinearIssue":
        """
        Create a LinearIssue from a GraphQL ``Issue`` node.

        Args:
            data: The issue node. Nested references may be objects or null,
                collections may be connections (``{"nodes": [...]}``) or lists.

        Returns:
            A LinearIssue instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        def _ref(key: str, model: type[ApiModel]) -> Any:
            value = data.get(key)
            return model.from_api_response(value) if isinstance(value, dict) else None

        priority = data.get("priority")
        priority_label = data.get("priorityLabel")
        if priority_label is None and isinstance(priority, int):
            priority_label = PRIORITY_LABELS.get(priority)

        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            identifier=data.get("identifier") or EMPTY_STRING,
            title=data.get("title") or EMPTY_STRING,
            description=data.get("description"),
            priority=priority,
            priority_label=priority_label,
            url=data.get("url"),
            branch_name=data.get("branchName") or None,
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            started_at=data.get("startedAt"),
            completed_at=data.get("completedAt"),
            canceled_at=data.get("canceledAt"),
            due_date=data.get("dueDate"),
            estimate=data.get("estimate"),
            state=_ref("state", LinearState),
            assignee=_ref("assignee", LinearUser),
            creator=_ref("creator", LinearUser),
            team=_ref("team", LinearTeam),
            project=_ref("project", LinearProject),
            parent=_ref("parent", LinearIssueRef),
            cycle=_ref("cycle", LinearCycle),
            labels=[
                LinearLabel.from_api_response(node)
                for node in connection_nodes(data.get("labels"))
            ],
            comments=[
                LinearComment.from_api_response(node)
                for node in connection_nodes(data.get("comments"))
            ],
            attachments=[
                LinearAttachment.from_api_response(node)
                for node in connection_nodes(data.get("attachments"))
            ],
            metadata=data.get("metadata"),
        )

    def to_summary_dict(self) -> dict[str, Any]:
        """Flat record used by list and search results."""
        result: dict[str, Any] = {
            "id": self.id,
            "identifier": self.identifier,
            "title": self.title,
            "status": self.status,
            "assignee": self.assignee.name if self.assignee else UNASSIGNED,
            "priority": self.priority,
            "url": self.url,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    def to_simplified_dict(self) -> dict[str, Any]:
        """Flat detail record with every resolved reference."""
        result: dict[str, Any] = {
            "id": self.id,
            "identifier": self.identifier,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "priority_label": self.priority_label,
            "status": self.status,
            "url": self.url,
            "branch_name": self.branch_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "assignee": self.assignee.to_simplified_dict() if self.assignee else None,
            "creator": self.creator.to_simplified_dict() if self.creator else None,
            "team": (
                {"id": self.team.id, "name": self.team.name, "key": self.team.key}
                if self.team
                else None
            ),
            "project": (
                {
                    "id": self.project.id,
                    "name": self.project.name,
                    "state": self.project.state,
                }
                if self.project
                else None
            ),
            "parent": self.parent.to_simplified_dict() if self.parent else None,
            "cycle": self.cycle.to_simplified_dict() if self.cycle else None,
            "labels": [label.to_simplified_dict() for label in self.labels],
            "comments": [comment.to_simplified_dict() for comment in self.comments],
            "attachments": [
                attachment.to_simplified_dict() for attachment in self.attachments
            ],
        }

        for key, value in (
            ("started_at", self.started_at),
            ("completed_at", self.completed_at),
            ("canceled_at", self.canceled_at),
            ("due_date", self.due_date),
            ("estimate", self.estimate),
        ):
            if value is not None:
                result[key] = value

        return result
