"""
Create a feature branch and pull request for a Linear issue.

The workflow is an ordered list of steps sharing a state object. Each step
either fills in its part of the state or raises; the first failure stops
the run and nothing already done is rolled back.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import MCPLinearWorkflowError
from ..github import GitHubFetcher
from ..linear import LinearFetcher
from ..logging_config import log_operation
from ..models.github import GitHubBranch, GitHubPullRequest
from ..models.linear import LinearIssue

logger = logging.getLogger("mcp-linear.workflows")


@dataclass
class FeaturePRState:
    issue_id: str
    owner: str
    repo: str
    base: str
    issue: LinearIssue | None = None
    branch: GitHubBranch | None = None
    pull_request: GitHubPullRequest | None = None
    linked: bool = False
    completed: list[str] = field(default_factory=list)

    def to_simplified_dict(self) -> dict:
        return {
            "issue": (
                {
                    "id": self.issue.id,
                    "identifier": self.issue.identifier,
                    "title": self.issue.title,
                    "url": self.issue.url,
                }
                if self.issue
                else None
            ),
            "branch": self.branch.to_simplified_dict() if self.branch else None,
            "pull_request": (
                self.pull_request.to_simplified_dict() if self.pull_request else None
            ),
            "linked": self.linked,
            "completed_steps": self.completed,
        }


Step = tuple[str, Callable[[FeaturePRState], None]]


def feature_pr_title(issue: LinearIssue) -> str:
    return f"{issue.identifier}: {issue.title}"


def _loaded_issue(state: FeaturePRState) -> LinearIssue:
    if state.issue is None:
        raise ValueError(f"Issue {state.issue_id} has not been loaded")
    return state.issue


class FeaturePRWorkflow:
    """Issue -> branch -> pull request -> link, in that order."""

    def __init__(self, linear: LinearFetcher, github: GitHubFetcher) -> None:
        self.linear = linear
        self.github = github

    def load_issue(self, state: FeaturePRState) -> None:
        issue = self.linear.get_issue(state.issue_id)
        if not issue.branch_name:
            raise ValueError(
                f"Issue {issue.identifier or state.issue_id} has no branch name"
            )
        state.issue = issue

    def create_branch(self, state: FeaturePRState) -> None:
        issue = _loaded_issue(state)
        state.branch = self.github.create_branch(
            state.owner, state.repo, issue.branch_name, from_branch=state.base
        )

    def create_pull_request(self, state: FeaturePRState) -> None:
        issue = _loaded_issue(state)
        state.pull_request = self.github.create_pr(
            state.owner,
            state.repo,
            title=feature_pr_title(issue),
            head=issue.branch_name,
            base=state.base,
            body=issue.description,
            linear_issue=issue,
        )

    def link(self, state: FeaturePRState) -> None:
        issue = _loaded_issue(state)
        if state.pull_request is None:
            raise ValueError("No pull request to link")
        state.pull_request, state.linked = self.github.link_pr_to_issue(
            state.owner,
            state.repo,
            state.pull_request.number,
            issue.identifier,
        )

    @property
    def steps(self) -> list[Step]:
        return [
            ("load issue", self.load_issue),
            ("create branch", self.create_branch),
            ("create pull request", self.create_pull_request),
            ("link pull request", self.link),
        ]

    def run(
        self, issue_id: str, owner: str, repo: str, base: str | None = None
    ) -> FeaturePRState:
        """
        Run every step in order.

        Args:
            issue_id: Linear issue UUID or identifier
            owner: Repository owner
            repo: Repository name
            base: Branch to branch from and merge into
                (default: configured base branch)

        Returns:
            The final state with issue, branch and pull request

        Raises:
            MCPLinearWorkflowError: Naming the failed step and the completed ones
        """
        state = FeaturePRState(
            issue_id=issue_id,
            owner=owner,
            repo=repo,
            base=base or self.github.config.default_base_branch,
        )
        with log_operation(logger, "create_feature_pr", issue_id=issue_id):
            for name, step in self.steps:
                try:
                    step(state)
                except Exception as e:
                    raise MCPLinearWorkflowError(name, state.completed, str(e)) from e
                state.completed.append(name)
                logger.debug(f"Feature PR step done: {name}")
        return state
