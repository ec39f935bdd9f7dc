"""Module for GitHub branch operations."""

import logging

from ..exceptions import MCPLinearAPIError, MCPLinearNotFoundError
from ..models.github import GitHubBranch
from .client import GitHubClient

logger = logging.getLogger("mcp-linear.github")


class BranchesMixin(GitHubClient):
    """Mixin for GitHub branch operations."""

    def get_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        """
        Resolve a branch to the SHA of its head commit.

        Raises:
            MCPLinearNotFoundError: If the branch does not exist
        """
        try:
            ref = self._get(f"/repos/{owner}/{repo}/git/ref/heads/{branch}")
        except MCPLinearAPIError as e:
            if e.status_code == 404:
                raise MCPLinearNotFoundError(
                    f"Branch '{branch}' not found in {owner}/{repo}"
                ) from e
            raise
        return ref["object"]["sha"]

    def create_branch(
        self,
        owner: str,
        repo: str,
        branch: str,
        from_branch: str | None = None,
    ) -> GitHubBranch:
        """
        Create a branch at the head commit of another branch.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Name of the new branch
            from_branch: Source branch (default: configured base branch)

        Returns:
            The created GitHubBranch

        Raises:
            MCPLinearNotFoundError: If the source branch does not exist
            MCPLinearAPIError: If GitHub rejects the new ref (e.g. it exists)
        """
        source = from_branch or self.config.default_base_branch
        sha = self.get_branch_sha(owner, repo, source)

        logger.debug(f"Creating branch {branch} from {source} ({sha[:7]})")
        ref = self._post(
            f"/repos/{owner}/{repo}/git/refs",
            json_data={"ref": f"refs/heads/{branch}", "sha": sha},
        )
        return GitHubBranch.from_api_response(ref, from_branch=source)
