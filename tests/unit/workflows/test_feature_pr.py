"""Tests for the feature branch and pull request workflow."""

from unittest.mock import MagicMock

import pytest

from mcp_linear.exceptions import (
    MCPLinearAPIError,
    MCPLinearNotFoundError,
    MCPLinearWorkflowError,
)
from mcp_linear.github import GitHubFetcher
from mcp_linear.linear import LinearFetcher
from mcp_linear.models.linear import LinearIssue
from mcp_linear.workflows import FeaturePRState, FeaturePRWorkflow, feature_pr_title
from tests.utils.factories import LinearIssueFactory
from tests.utils.fakes import FakeGitHubAPI


@pytest.fixture
def linear() -> MagicMock:
    linear = MagicMock(spec=LinearFetcher)
    linear.get_issue.return_value = LinearIssue.from_api_response(
        LinearIssueFactory.create(
            "ENG-123", title="Add login", description="Adds the login page."
        )
    )
    return linear


@pytest.fixture
def api() -> FakeGitHubAPI:
    return FakeGitHubAPI(pulls={})


@pytest.fixture
def github(github_config, api) -> GitHubFetcher:
    github = GitHubFetcher(config=github_config)
    github._request = api
    return github


def test_feature_pr_title():
    issue = LinearIssue(identifier="ENG-1", title="Fix crash")

    assert feature_pr_title(issue) == "ENG-1: Fix crash"


def test_full_run(linear, github, api):
    state = FeaturePRWorkflow(linear, github).run("ENG-123", "acme", "app")

    assert state.completed == [
        "load issue",
        "create branch",
        "create pull request",
        "link pull request",
    ]
    assert state.branch.name == "alice/eng-123-test-issue-title"
    assert state.branch.from_branch == "dev"
    assert state.pull_request.title == "ENG-123: Add login"
    assert state.pull_request.head == "alice/eng-123-test-issue-title"
    assert state.pull_request.base == "dev"
    assert state.pull_request.body == "Adds the login page.\n\nFixes ENG-123"
    assert state.linked is True


def test_explicit_base(linear, github, api):
    state = FeaturePRWorkflow(linear, github).run("ENG-123", "acme", "app", base="main")

    assert state.branch.sha == api.refs["main"]
    assert state.pull_request.base == "main"


def test_issue_without_branch_name_stops_before_github(linear, github, api):
    linear.get_issue.return_value = LinearIssue.from_api_response(
        LinearIssueFactory.create("ENG-123", branchName=None)
    )

    with pytest.raises(MCPLinearWorkflowError) as exc:
        FeaturePRWorkflow(linear, github).run("ENG-123", "acme", "app")

    assert exc.value.step == "load issue"
    assert exc.value.completed == []
    assert "has no branch name" in str(exc.value)
    assert api.calls == []


def test_missing_issue(linear, github, api):
    linear.get_issue.side_effect = MCPLinearNotFoundError("Issue ENG-404 not found")

    with pytest.raises(MCPLinearWorkflowError, match="Step 'load issue' failed"):
        FeaturePRWorkflow(linear, github).run("ENG-404", "acme", "app")
    assert api.calls == []


def test_failure_after_branch_keeps_branch(linear, github, api):
    api.refs["alice/eng-123-test-issue-title"] = "d" * 40
    with pytest.raises(MCPLinearWorkflowError) as exc:
        FeaturePRWorkflow(linear, github).run("ENG-123", "acme", "app")

    assert exc.value.step == "create branch"
    assert exc.value.completed == ["load issue"]
    assert str(exc.value).endswith("(completed steps: load issue)")
    assert not [c for c in api.calls if c[1].endswith("/pulls")]


def test_pull_request_failure_reports_completed_steps(linear, github, api):
    def reject_pulls(method, endpoint, params=None, json_data=None):
        if method == "POST" and endpoint.endswith("/pulls"):
            raise MCPLinearAPIError("GitHub API error (422): No commits between", 422)
        return api(method, endpoint, params=params, json_data=json_data)

    github._request = reject_pulls

    with pytest.raises(MCPLinearWorkflowError) as exc:
        FeaturePRWorkflow(linear, github).run("ENG-123", "acme", "app")

    assert exc.value.step == "create pull request"
    assert exc.value.completed == ["load issue", "create branch"]
    assert "No commits between" in str(exc.value)
    assert "alice/eng-123-test-issue-title" in api.refs


def test_github_steps_require_loaded_issue(linear, github, api):
    workflow = FeaturePRWorkflow(linear, github)
    state = FeaturePRState(issue_id="ENG-123", owner="acme", repo="app", base="dev")

    with pytest.raises(ValueError, match="ENG-123 has not been loaded"):
        workflow.create_branch(state)
    with pytest.raises(ValueError, match="ENG-123 has not been loaded"):
        workflow.create_pull_request(state)
    assert api.calls == []
