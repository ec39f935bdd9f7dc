"""GitHub data models."""

from .branch import GitHubBranch
from .diff import BranchDiff, DiffAnalysis, FileChange, MergedPullRequest
from .pull_request import (
    LINEAR_ISSUE_KEY_PATTERN,
    GitHubPullRequest,
    extract_linear_issue_keys,
)

__all__ = [
    "BranchDiff",
    "DiffAnalysis",
    "FileChange",
    "GitHubBranch",
    "GitHubPullRequest",
    "LINEAR_ISSUE_KEY_PATTERN",
    "MergedPullRequest",
    "extract_linear_issue_keys",
]
