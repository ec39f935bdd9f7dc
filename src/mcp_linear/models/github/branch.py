"""GitHub branch model."""

from typing import Any

from ..base import ApiModel
from ..constants import EMPTY_STRING


class GitHubBranch(ApiModel):
    """A branch created from another branch's head commit."""

    name: str = EMPTY_STRING
    ref: str = EMPTY_STRING
    sha: str = EMPTY_STRING
    from_branch: str | None = None
    url: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "GitHubBranch":
        """
        Create a GitHubBranch from a ``git/refs`` payload.

        Args:
            data: The ref data from the GitHub API
            from_branch: Name of the branch the ref was created from

        Returns:
            A GitHubBranch instance
        """
        if not data or not isinstance(data, dict):
            return cls()

        ref = data.get("ref", EMPTY_STRING)
        obj = data.get("object")
        sha = obj.get("sha", EMPTY_STRING) if isinstance(obj, dict) else EMPTY_STRING
        return cls(
            name=ref.removeprefix("refs/heads/"),
            ref=ref,
            sha=sha,
            from_branch=kwargs.get("from_branch"),
            url=data.get("url"),
        )
