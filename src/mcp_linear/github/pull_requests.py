"""Module for GitHub pull request operations."""

import base64
import logging
import re
from typing import Any

from ..exceptions import MCPLinearAPIError
from ..models.github import GitHubPullRequest
from ..models.linear import LinearIssue
from .client import GitHubClient

logger = logging.getLogger("mcp-linear.github")

PR_TEMPLATE_PATHS = (
    ".github/pull_request_template.md",
    ".github/PULL_REQUEST_TEMPLATE.md",
    "docs/pull_request_template.md",
    "PULL_REQUEST_TEMPLATE.md",
)

DEFAULT_KEY_CHANGES = "- Initial implementation"
DEFAULT_TESTING = (
    "- [ ] Tested locally\n"
    "- [ ] Unit tests added/updated\n"
    "- [ ] Integration tests added/updated"
)

BULLET_PATTERN = re.compile(r"^\s*[-*]\s+(.+)$", re.MULTILINE)


def format_issue_sections(issue: LinearIssue) -> dict[str, str]:
    """Render the PR template sections for a Linear issue.

    Key changes are the bullet points of the issue description. Attachments
    are rendered as inline images.
    """
    bullets = BULLET_PATTERN.findall(issue.description or "")
    key_changes = (
        "\n".join(f"- {bullet.strip()}" for bullet in bullets)
        if bullets
        else DEFAULT_KEY_CHANGES
    )
    attachments = "\n".join(
        f'<img width="758" alt="{attachment.title or "Screenshot"}" '
        f'src="{attachment.url}">'
        for attachment in issue.attachments
    )
    return {
        "Overview": issue.description or "",
        "Key Changes": key_changes,
        "Testing": DEFAULT_TESTING,
        "Links": f"[Linear Issue {issue.identifier or issue.id}]({issue.url or ''})",
        "Attachments": attachments,
    }


def fill_pr_template(template: str, sections: dict[str, str]) -> str:
    """Replace the body of each ``## <Section>`` heading in ``template``.

    A section runs until the next ``## `` heading or the end of the
    template. Sections missing from the template are ignored, and empty
    section content leaves the template's own text in place.
    """
    filled = template
    for name, content in sections.items():
        if not content:
            continue
        pattern = re.compile(rf"## {re.escape(name)}.*?(?=## |\Z)", re.DOTALL)
        replacement = f"## {name}\n\n{content}\n\n"
        filled = pattern.sub(lambda _match: replacement, filled, count=1)
    return filled


class PullRequestsMixin(GitHubClient):
    """Mixin for GitHub pull request operations."""

    def get_pr_template(self, owner: str, repo: str) -> str | None:
        """
        Find the repository's pull request template.

        Every known location is tried in order; a missing file moves on to
        the next one.

        Returns:
            The decoded template, or None if no location has one
        """
        for path in PR_TEMPLATE_PATHS:
            try:
                data = self._get(f"/repos/{owner}/{repo}/contents/{path}")
            except MCPLinearAPIError as e:
                if e.status_code == 404:
                    continue
                raise
            if isinstance(data, dict) and data.get("content"):
                logger.debug(f"Using PR template {path} from {owner}/{repo}")
                return base64.b64decode(data["content"]).decode("utf-8")
        return None

    def build_pr_body(self, owner: str, repo: str, issue: LinearIssue) -> str:
        """Body for a PR created from a Linear issue.

        Uses the repository PR template filled from the issue when there is
        one, otherwise the issue description.
        """
        template = self.get_pr_template(owner, repo)
        if template:
            return fill_pr_template(template, format_issue_sections(issue))
        return issue.description or ""

    def create_pr(
        self,
        owner: str,
        repo: str,
        title: str,
        head: str,
        base: str,
        body: str | None = None,
        draft: bool = False,
        linear_issue: LinearIssue | None = None,
    ) -> GitHubPullRequest:
        """
        Create a new pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            title: Pull request title
            head: Branch with the changes
            base: Branch to merge into
            body: Pull request description
            draft: Open as draft
            linear_issue: Issue used to build the body when none is given

        Returns:
            GitHubPullRequest object

        Raises:
            MCPLinearAPIError: If GitHub rejects the pull request
        """
        if not body and linear_issue is not None:
            body = self.build_pr_body(owner, repo, linear_issue)

        payload: dict[str, Any] = {
            "title": title,
            "head": head,
            "base": base,
            "draft": draft,
            "maintainer_can_modify": True,
        }
        if body:
            payload["body"] = body

        logger.debug(f"Creating pull request in {owner}/{repo}: {head} -> {base}")
        response = self._post(f"/repos/{owner}/{repo}/pulls", json_data=payload)
        return GitHubPullRequest.from_api_response(response)

    def update_pr(
        self,
        owner: str,
        repo: str,
        pull_number: int,
        title: str | None = None,
        body: str | None = None,
    ) -> GitHubPullRequest:
        """
        Update the title and/or body of a pull request.

        Raises:
            ValueError: If neither title nor body is given
        """
        payload: dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if body is not None:
            payload["body"] = body
        if not payload:
            raise ValueError("At least one of title or body must be provided")

        response = self._patch(
            f"/repos/{owner}/{repo}/pulls/{pull_number}", json_data=payload
        )
        return GitHubPullRequest.from_api_response(response)

    def get_pr(self, owner: str, repo: str, pull_number: int) -> GitHubPullRequest:
        """Get a pull request, including the Linear keys it references."""
        response = self._get(f"/repos/{owner}/{repo}/pulls/{pull_number}")
        return GitHubPullRequest.from_api_response(response)

    def link_pr_to_issue(
        self, owner: str, repo: str, pull_number: int, issue_id: str
    ) -> tuple[GitHubPullRequest, bool]:
        """
        Reference a Linear issue from a pull request body.

        Appends ``Fixes <issue_id>`` unless the body already mentions the
        issue, so linking twice leaves a single marker.

        Returns:
            The pull request as it now stands, and whether it was changed
        """
        pr = self.get_pr(owner, repo, pull_number)
        body = pr.body or ""
        if issue_id in body:
            logger.debug(f"PR #{pull_number} already references {issue_id}")
            return pr, False

        marker = f"Fixes {issue_id}"
        updated_body = f"{body}\n\n{marker}" if body else marker
        return self.update_pr(owner, repo, pull_number, body=updated_body), True
