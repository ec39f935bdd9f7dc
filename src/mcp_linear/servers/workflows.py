"""Tools that chain Linear and GitHub calls."""

import json
import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_linear.servers.dependencies import get_github_fetcher, get_linear_fetcher
from mcp_linear.utils.decorators import check_write_access, handle_tool_errors
from mcp_linear.workflows import FeaturePRWorkflow

logger = logging.getLogger(__name__)

workflows_mcp = FastMCP(
    name="Linear/GitHub Workflows",
    instructions="Provides tools that span Linear issues and GitHub pull requests.",
)


@workflows_mcp.tool(
    tags={"linear", "github", "write"},
    annotations={"title": "Create Feature PR", "destructiveHint": False},
)
@handle_tool_errors
@check_write_access
async def create_feature_pr(
    ctx: Context,
    issue_id: Annotated[
        str, Field(description="Linear issue ID or identifier (e.g. 'ENG-123')", min_length=1)
    ],
    owner: Annotated[str, Field(description="Repository owner (user or organization)")],
    repo: Annotated[str, Field(description="Repository name")],
    base: Annotated[
        str | None,
        Field(description="Branch to start from and merge into (default: the configured base branch)"),
    ] = None,
) -> str:
    """Create the issue's branch, open a pull request for it and link the two.

    Uses the branch name Linear suggests for the issue. The pull request is
    titled ``<identifier>: <title>`` and described with the issue
    description. Steps already done are kept if a later step fails.

    Args:
        ctx: The FastMCP context.
        issue_id: Linear issue ID or identifier.
        owner: Repository owner.
        repo: Repository name.
        base: Base branch.

    Returns:
        JSON string with the issue, branch, pull request and completed steps.
    """
    linear = await get_linear_fetcher(ctx)
    github = await get_github_fetcher(ctx)
    state = FeaturePRWorkflow(linear, github).run(issue_id, owner, repo, base=base)
    return json.dumps(state.to_simplified_dict(), indent=2, ensure_ascii=False)
