"""Tests for the GitHub pull request operations."""

import pytest

from mcp_linear.exceptions import MCPLinearAPIError
from mcp_linear.github import GitHubFetcher
from mcp_linear.github.pull_requests import (
    DEFAULT_KEY_CHANGES,
    PR_TEMPLATE_PATHS,
    fill_pr_template,
    format_issue_sections,
)
from mcp_linear.models.linear import LinearIssue
from tests.utils.factories import GitHubPullRequestFactory, LinearIssueFactory
from tests.utils.fakes import FakeGitHubAPI

TEMPLATE = """## Overview

Describe the change.

## Key Changes

- ...

## Testing

- [ ] Tested

## Links

"""


@pytest.fixture
def api() -> FakeGitHubAPI:
    return FakeGitHubAPI()


@pytest.fixture
def fetcher(github_config, api) -> GitHubFetcher:
    fetcher = GitHubFetcher(config=github_config)
    fetcher._request = api
    return fetcher


@pytest.fixture
def issue() -> LinearIssue:
    node = LinearIssueFactory.create(
        "ENG-123",
        description="Add a login page.\n\n- Add form\n- Add validation",
    )
    node["attachments"] = {
        "nodes": [{"id": "a", "title": "Mockup", "url": "https://cdn.example.com/m.png"}]
    }
    return LinearIssue.from_api_response(node)


class TestLinkPrToIssue:
    def test_appends_fixes_marker(self, fetcher, api):
        pr, linked = fetcher.link_pr_to_issue("acme", "app", 42, "ENG-9")

        assert linked is True
        assert pr.body == "Implements the feature.\n\nFixes ENG-9"
        assert ("PATCH", "/repos/acme/app/pulls/42") in api.calls

    def test_linking_twice_leaves_single_marker(self, fetcher, api):
        fetcher.link_pr_to_issue("acme", "app", 42, "ENG-9")
        pr, linked = fetcher.link_pr_to_issue("acme", "app", 42, "ENG-9")

        assert linked is False
        assert pr.body.count("Fixes ENG-9") == 1
        assert [c for c in api.calls if c[0] == "PATCH"] == [
            ("PATCH", "/repos/acme/app/pulls/42")
        ]

    def test_empty_body(self, fetcher, api):
        api.pulls[42]["body"] = None

        pr, _ = fetcher.link_pr_to_issue("acme", "app", 42, "ENG-9")

        assert pr.body == "Fixes ENG-9"

    def test_missing_pull_request(self, fetcher):
        with pytest.raises(MCPLinearAPIError, match="404"):
            fetcher.link_pr_to_issue("acme", "app", 999, "ENG-9")


class TestPrTemplate:
    def test_not_found_anywhere(self, fetcher, api):
        assert fetcher.get_pr_template("acme", "app") is None

        template_calls = [c for c in api.calls if "/contents/" in c[1]]
        assert len(template_calls) == len(PR_TEMPLATE_PATHS)

    def test_first_existing_location_wins(self, fetcher, api):
        api.contents["docs/pull_request_template.md"] = "docs template"
        api.contents["PULL_REQUEST_TEMPLATE.md"] = "root template"

        assert fetcher.get_pr_template("acme", "app") == "docs template"

    def test_other_errors_propagate(self, fetcher, api):
        def failing(method, endpoint, params=None, json_data=None):
            raise MCPLinearAPIError("GitHub API error (500): boom", 500)

        fetcher._request = failing

        with pytest.raises(MCPLinearAPIError, match="500"):
            fetcher.get_pr_template("acme", "app")


def test_format_issue_sections(issue):
    sections = format_issue_sections(issue)

    assert sections["Overview"].startswith("Add a login page.")
    assert sections["Key Changes"] == "- Add form\n- Add validation"
    assert sections["Links"] == (
        "[Linear Issue ENG-123](https://linear.app/acme/issue/ENG-123)"
    )
    assert 'src="https://cdn.example.com/m.png"' in sections["Attachments"]


def test_format_issue_sections_without_bullets():
    issue = LinearIssue.from_api_response(LinearIssueFactory.create("ENG-1"))

    assert format_issue_sections(issue)["Key Changes"] == DEFAULT_KEY_CHANGES


def test_fill_pr_template_replaces_known_sections(issue):
    body = fill_pr_template(TEMPLATE, format_issue_sections(issue))

    assert "Describe the change." not in body
    assert "## Key Changes\n\n- Add form\n- Add validation" in body
    assert "[Linear Issue ENG-123]" in body
    assert "## Attachments" not in body


def test_fill_pr_template_keeps_section_for_empty_content():
    body = fill_pr_template(TEMPLATE, {"Overview": ""})

    assert body == TEMPLATE


class TestCreatePr:
    def test_body_from_template(self, fetcher, api, issue):
        api.contents[".github/pull_request_template.md"] = TEMPLATE

        pr = fetcher.create_pr(
            "acme", "app", title="ENG-123: Login", head="feature", base="dev",
            linear_issue=issue,
        )

        assert "- Add validation" in pr.body
        assert pr.linear_issues == ["ENG-123"]

    def test_body_falls_back_to_description(self, fetcher, issue):
        pr = fetcher.create_pr(
            "acme", "app", title="Login", head="feature", base="dev",
            linear_issue=issue,
        )

        assert pr.body == issue.description

    def test_explicit_body_skips_template_lookup(self, fetcher, api, issue):
        pr = fetcher.create_pr(
            "acme", "app", title="Login", head="feature", base="dev",
            body="Custom body", linear_issue=issue,
        )

        assert pr.body == "Custom body"
        assert not [c for c in api.calls if "/contents/" in c[1]]

    def test_draft(self, fetcher):
        pr = fetcher.create_pr(
            "acme", "app", title="WIP", head="feature", base="dev", draft=True
        )

        assert pr.draft is True
        assert pr.head == "feature"


def test_update_pr_requires_a_field(fetcher, api):
    with pytest.raises(ValueError, match="title or body"):
        fetcher.update_pr("acme", "app", 42)
    assert api.calls == []


def test_get_pr_reports_linear_keys(github_config):
    api = FakeGitHubAPI(
        pulls={5: GitHubPullRequestFactory.create(5, title="OPS-1: tidy", body="See ENG-2")}
    )
    fetcher = GitHubFetcher(config=github_config)
    fetcher._request = api

    assert fetcher.get_pr("acme", "app", 5).linear_issues == ["OPS-1", "ENG-2"]
