"""
GitHub pull request models.

This module provides Pydantic models for GitHub pull requests and the
Linear issue keys referenced from them.
"""

import logging
import re
from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING, UNKNOWN

logger = logging.getLogger(__name__)

LINEAR_ISSUE_KEY_PATTERN = re.compile(r"\b([A-Z]+-\d+)\b")


def extract_linear_issue_keys(*texts: str | None) -> list[str]:
    """Return de-duplicated ``ABC-123`` keys found across ``texts``, in order."""
    seen: dict[str, None] = {}
    for text in texts:
        if not text:
            continue
        for key in LINEAR_ISSUE_KEY_PATTERN.findall(text):
            seen.setdefault(key, None)
    return list(seen)


class GitHubPullRequest(ApiModel):
    """
    Model representing a GitHub pull request.

    ``linear_issues`` holds the Linear keys mentioned in the title, then the
    body.
    """

    number: int = 0
    title: str = UNKNOWN
    body: str | None = None
    url: str = EMPTY_STRING
    state: str = EMPTY_STRING
    head: str = EMPTY_STRING
    base: str = EMPTY_STRING
    draft: bool = False
    merged: bool | None = None
    merged_at: str | None = None
    merge_commit_sha: str | None = None
    author: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    linear_issues: list[str] = []

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "GitHubPullRequest":
        """
        Create a GitHubPullRequest from a GitHub REST ``pulls`` payload.

        Args:
            data: The pull request data from the GitHub API

        Returns:
            A GitHubPullRequest instance
        """
        if not data:
            return cls()

        if not isinstance(data, dict):
            logger.debug("Received non-dictionary data, returning default instance")
            return cls()

        head = data.get("head")
        base = data.get("base")
        user = data.get("user")
        title = data.get("title") or UNKNOWN
        body = data.get("body")

        return cls(
            number=data.get("number", 0),
            title=title,
            body=body,
            url=data.get("html_url") or data.get("url") or EMPTY_STRING,
            state=data.get("state", EMPTY_STRING),
            head=head.get("ref", EMPTY_STRING) if isinstance(head, dict) else EMPTY_STRING,
            base=base.get("ref", EMPTY_STRING) if isinstance(base, dict) else EMPTY_STRING,
            draft=bool(data.get("draft", False)),
            merged=data.get("merged"),
            merged_at=data.get("merged_at"),
            merge_commit_sha=data.get("merge_commit_sha"),
            author=user.get("login") if isinstance(user, dict) else None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            linear_issues=extract_linear_issue_keys(title, body),
        )
