"""
GitHub comparison models.

Changed files between two refs, the per-directory analysis of those
changes, and the pull requests merged in that range.
"""

from collections import Counter
from typing import Any

from pydantic import Field

from ..base import ApiModel
from ..constants import EMPTY_STRING, UNKNOWN
from .pull_request import extract_linear_issue_keys


def top_level_directory(path: str) -> str:
    return path.split("/", 1)[0]


class FileChange(ApiModel):
    file_path: str = EMPTY_STRING
    additions: int = 0
    deletions: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "FileChange":
        if not data or not isinstance(data, dict):
            return cls()
        return cls(
            file_path=data.get("filename", EMPTY_STRING),
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
        )


class DiffAnalysis(ApiModel):
    changed_files: list[FileChange] = []
    total_additions: int = 0
    total_deletions: int = 0
    summary: str = EMPTY_STRING

    @classmethod
    def from_files(cls, files: list[FileChange]) -> "DiffAnalysis":
        """Aggregate totals and build a summary grouped by top-level directory."""
        by_dir: dict[str, list[FileChange]] = {}
        for change in files:
            by_dir.setdefault(top_level_directory(change.file_path), []).append(change)

        dir_changes = []
        for directory, changes in by_dir.items():
            adds = sum(c.additions for c in changes)
            dels = sum(c.deletions for c in changes)
            dir_changes.append(f"{directory} ({len(changes)} files, +{adds} -{dels})")

        return cls(
            changed_files=files,
            total_additions=sum(c.additions for c in files),
            total_deletions=sum(c.deletions for c in files),
            summary=(
                f"Changed {len(files)} files across {len(by_dir)} directories: "
                + ", ".join(dir_changes)
            ),
        )

    def top_directories(self, limit: int = 2) -> list[str]:
        """Directories with the most changed files, most first."""
        counts = Counter(top_level_directory(c.file_path) for c in self.changed_files)
        return [directory for directory, _ in counts.most_common(limit)]


class BranchDiff(ApiModel):
    base: str = EMPTY_STRING
    head: str = EMPTY_STRING
    files: list[FileChange] = []
    analysis: DiffAnalysis = Field(default_factory=DiffAnalysis)

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "BranchDiff":
        """
        Create a BranchDiff from a ``compare`` payload.

        Args:
            data: The comparison data from the GitHub API
            base: The base ref of the comparison
            head: The head ref of the comparison

        Returns:
            A BranchDiff instance
        """
        raw_files = data.get("files") if isinstance(data, dict) else None
        files = [FileChange.from_api_response(f) for f in raw_files or []]
        return cls(
            base=kwargs.get("base", EMPTY_STRING),
            head=kwargs.get("head", EMPTY_STRING),
            files=files,
            analysis=DiffAnalysis.from_files(files),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "base": self.base,
            "head": self.head,
            "files": [f.to_simplified_dict() for f in self.files],
            "total_additions": self.analysis.total_additions,
            "total_deletions": self.analysis.total_deletions,
            "summary": self.analysis.summary,
        }


class MergedPullRequest(ApiModel):
    """A pull request merged between two refs."""

    number: int = 0
    title: str = EMPTY_STRING
    url: str = EMPTY_STRING
    merged_at: str | None = None
    author: str = UNKNOWN
    body: str = EMPTY_STRING
    linear_issues: list[str] = []

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "MergedPullRequest":
        if not data or not isinstance(data, dict):
            return cls()
        user = data.get("user")
        title = data.get("title") or EMPTY_STRING
        body = data.get("body") or EMPTY_STRING
        return cls(
            number=data.get("number", 0),
            title=title,
            url=data.get("html_url", EMPTY_STRING),
            merged_at=data.get("merged_at"),
            author=user.get("login", UNKNOWN) if isinstance(user, dict) else UNKNOWN,
            body=body,
            linear_issues=extract_linear_issue_keys(title, body),
        )
