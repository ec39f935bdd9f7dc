"""Linear data models."""

from .common import (
    LinearAttachment,
    LinearComment,
    LinearCycle,
    LinearIssueRef,
    LinearLabel,
    LinearState,
    LinearUser,
)
from .issue import PRIORITY_LABELS, LinearIssue
from .project import LinearProject
from .team import LinearTeam

__all__ = [
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
    "PRIORITY_LABELS",
]
