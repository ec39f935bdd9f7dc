"""
Pydantic result types for MCP Linear.

Every remote payload is adapted into one of these models before it crosses
the tool boundary.
"""

from .base import ApiModel
from .github import (
    BranchDiff,
    DiffAnalysis,
    FileChange,
    GitHubBranch,
    GitHubPullRequest,
    MergedPullRequest,
)
from .linear import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearIssue,
    LinearIssueRef,
    LinearLabel,
    LinearProject,
    LinearState,
    LinearTeam,
    LinearUser,
)

__all__ = [
    "ApiModel",
    "BranchDiff",
    "DiffAnalysis",
    "FileChange",
    "GitHubBranch",
    "GitHubPullRequest",
    "LinearAttachment",
    "LinearComment",
    "LinearCycle",
    "LinearIssue",
    "LinearIssueRef",
    "LinearLabel",
    "LinearProject",
    "LinearState",
    "LinearTeam",
    "LinearUser",
    "MergedPullRequest",
]
