"""Module for comparing refs and summarising what was merged between them."""

import logging
import re
from collections import Counter
from typing import Any

from ..models.github import BranchDiff, MergedPullRequest
from .client import GitHubClient

logger = logging.getLogger("mcp-linear.github")

BRACKET_PREFIX = re.compile(r"^\[.*\]\s*")


def _pr_type(title: str) -> str:
    if ":" not in title:
        return ""
    return BRACKET_PREFIX.sub("", title.split(":", 1)[0]).strip()


def _pr_summary(title: str) -> str:
    if ":" not in title:
        return ""
    summary = title.split(":", 1)[1].strip()
    return BRACKET_PREFIX.sub("", summary).rstrip(":").strip()


def build_release_title(diff: BranchDiff, prs: list[MergedPullRequest]) -> str:
    """
    Build a release PR title from merged PR titles and the changed files.

    The conventional-commit types of the merged PRs are listed most
    frequent first (``chore`` when there are none). The summary is taken
    from the first merged PR with one, otherwise from the two directories
    with the most changed files.

    Returns:
        A title like ``release: feat/fix add login page``
    """
    type_counts = Counter(_pr_type(pr.title) for pr in prs if _pr_type(pr.title))
    types = [pr_type for pr_type, _ in type_counts.most_common()]
    type_str = "/".join(types) if types else "chore"

    summaries = [s for s in (_pr_summary(pr.title) for pr in prs) if s]
    if summaries:
        summary = summaries[0]
    else:
        directories = diff.analysis.top_directories(2)
        summary = f"update {' and '.join(directories)} components"

    return f"release: {type_str} {summary}"


class CompareMixin(GitHubClient):
    """Mixin for ref comparison operations."""

    def compare(self, owner: str, repo: str, base: str, head: str) -> dict[str, Any]:
        return self._get(f"/repos/{owner}/{repo}/compare/{base}...{head}")

    def get_branch_diff(
        self, owner: str, repo: str, base: str, head: str
    ) -> BranchDiff:
        """
        Files changed between two refs, with totals and a per-directory summary.
        """
        comparison = self.compare(owner, repo, base, head)
        return BranchDiff.from_api_response(comparison, base=base, head=head)

    def get_merged_prs(
        self, owner: str, repo: str, base: str, head: str
    ) -> list[MergedPullRequest]:
        """
        Pull requests whose merge commit lies between ``base`` and ``head``.

        Only the 100 most recently updated closed pull requests are
        considered.
        """
        comparison = self.compare(owner, repo, base, head)
        commit_shas = {
            commit.get("sha") for commit in comparison.get("commits") or []
        }

        closed = self._get(
            f"/repos/{owner}/{repo}/pulls",
            params={
                "state": "closed",
                "sort": "updated",
                "direction": "desc",
                "per_page": 100,
            },
        )
        merged = [
            MergedPullRequest.from_api_response(pr)
            for pr in closed or []
            if pr.get("merged_at") and pr.get("merge_commit_sha") in commit_shas
        ]
        logger.debug(f"Found {len(merged)} merged PRs between {base} and {head}")
        return merged

    def generate_release_title(
        self, owner: str, repo: str, base: str, head: str
    ) -> str:
        diff = self.get_branch_diff(owner, repo, base, head)
        prs = self.get_merged_prs(owner, repo, base, head)
        return build_release_title(diff, prs)
