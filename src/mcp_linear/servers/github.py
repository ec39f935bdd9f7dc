"""GitHub FastMCP server instance and tool definitions."""

import json
import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_linear.servers.dependencies import get_github_fetcher, get_linear_fetcher
from mcp_linear.utils.decorators import check_write_access, handle_tool_errors

logger = logging.getLogger(__name__)

github_mcp = FastMCP(
    name="GitHub MCP Service",
    instructions="Provides GitHub branch and pull request tools linked to Linear issues.",
)

Owner = Annotated[str, Field(description="Repository owner (user or organization)")]
Repo = Annotated[str, Field(description="Repository name")]
PullNumber = Annotated[int, Field(description="Pull request number", ge=1)]


def _dumps(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@github_mcp.tool(
    tags={"github", "write"},
    annotations={"title": "Create Branch", "destructiveHint": False},
)
@handle_tool_errors
@check_write_access
async def create_branch(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    branch: Annotated[str, Field(description="Name of the branch to create", min_length=1)],
    from_branch: Annotated[
        str | None,
        Field(description="Branch to start from (default: the configured base branch)"),
    ] = None,
) -> str:
    """Create a branch at the head commit of another branch.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        branch: New branch name.
        from_branch: Source branch.

    Returns:
        JSON string representing the created branch.
    """
    github = await get_github_fetcher(ctx)
    created = github.create_branch(owner, repo, branch, from_branch=from_branch)
    return _dumps(created.to_simplified_dict())


@github_mcp.tool(
    tags={"github", "write"},
    annotations={"title": "Create Pull Request", "destructiveHint": False},
)
@handle_tool_errors
@check_write_access
async def create_pr(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    title: Annotated[str, Field(description="Pull request title", min_length=1)],
    head: Annotated[str, Field(description="Branch containing the changes")],
    base: Annotated[str, Field(description="Branch to merge into")],
    body: Annotated[str | None, Field(description="Pull request description")] = None,
    draft: Annotated[bool, Field(description="Open as a draft pull request")] = False,
    linear_issue_id: Annotated[
        str | None,
        Field(
            description=(
                "Linear issue ID or identifier. When set and no body is given, "
                "the body is built from the issue and the repository PR template."
            )
        ),
    ] = None,
) -> str:
    """Create a pull request.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        title: Pull request title.
        head: Source branch.
        base: Target branch.
        body: Pull request description.
        draft: Whether to open as draft.
        linear_issue_id: Linear issue used to build the description.

    Returns:
        JSON string representing the created pull request.
    """
    github = await get_github_fetcher(ctx)
    linear_issue = None
    if linear_issue_id and not body:
        linear = await get_linear_fetcher(ctx)
        linear_issue = await linear.get_issue_details(linear_issue_id)

    pr = github.create_pr(
        owner,
        repo,
        title=title,
        head=head,
        base=base,
        body=body,
        draft=draft,
        linear_issue=linear_issue,
    )
    return _dumps(pr.to_simplified_dict())


@github_mcp.tool(
    tags={"github", "write"},
    annotations={"title": "Update Pull Request", "destructiveHint": True},
)
@handle_tool_errors
@check_write_access
async def update_pr(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    pull_number: PullNumber,
    title: Annotated[str | None, Field(description="New title")] = None,
    body: Annotated[str | None, Field(description="New description")] = None,
) -> str:
    """Update the title and/or description of a pull request.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        pull_number: Pull request number.
        title: New title.
        body: New description.

    Returns:
        JSON string representing the updated pull request.
    """
    github = await get_github_fetcher(ctx)
    pr = github.update_pr(owner, repo, pull_number, title=title, body=body)
    return _dumps(pr.to_simplified_dict())


@github_mcp.tool(
    tags={"github", "read"},
    annotations={"title": "Get Pull Request", "readOnlyHint": True},
)
@handle_tool_errors
async def get_pr(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    pull_number: PullNumber,
) -> str:
    """Get a pull request and the Linear issue keys it mentions.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        pull_number: Pull request number.

    Returns:
        JSON string representing the pull request, with ``linear_issues``.
    """
    github = await get_github_fetcher(ctx)
    return _dumps(github.get_pr(owner, repo, pull_number).to_simplified_dict())


@github_mcp.tool(
    tags={"github", "write"},
    annotations={"title": "Link Pull Request to Linear Issue", "idempotentHint": True},
)
@handle_tool_errors
@check_write_access
async def link_pr_to_issue(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    pull_number: PullNumber,
    issue_id: Annotated[
        str, Field(description="Linear issue identifier (e.g. 'ENG-123')", min_length=1)
    ],
) -> str:
    """Reference a Linear issue from a pull request description.

    Appends ``Fixes <issue_id>`` unless the description already mentions the
    issue.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        pull_number: Pull request number.
        issue_id: Linear issue identifier.

    Returns:
        JSON string with the pull request and whether it was changed.
    """
    github = await get_github_fetcher(ctx)
    pr, linked = github.link_pr_to_issue(owner, repo, pull_number, issue_id)
    return _dumps({"linked": linked, "pull_request": pr.to_simplified_dict()})


@github_mcp.tool(
    tags={"github", "read"},
    annotations={"title": "Get Branch Diff", "readOnlyHint": True},
)
@handle_tool_errors
async def get_branch_diff(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    base: Annotated[str, Field(description="Base ref")],
    head: Annotated[str, Field(description="Head ref")],
) -> str:
    """Summarise the files changed between two refs.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        base: Base ref.
        head: Head ref.

    Returns:
        JSON string with changed files, totals and a per-directory summary.
    """
    github = await get_github_fetcher(ctx)
    return _dumps(github.get_branch_diff(owner, repo, base, head).to_simplified_dict())


@github_mcp.tool(
    tags={"github", "read"},
    annotations={"title": "List Merged Pull Requests", "readOnlyHint": True},
)
@handle_tool_errors
async def list_merged_prs(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    base: Annotated[str, Field(description="Base ref")],
    head: Annotated[str, Field(description="Head ref")],
) -> str:
    """List pull requests merged between two refs, with their Linear keys.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        base: Base ref.
        head: Head ref.

    Returns:
        JSON array of merged pull requests.
    """
    github = await get_github_fetcher(ctx)
    prs = github.get_merged_prs(owner, repo, base, head)
    return _dumps([pr.to_simplified_dict() for pr in prs])


@github_mcp.tool(
    tags={"github", "read"},
    annotations={"title": "Generate Release Title", "readOnlyHint": True},
)
@handle_tool_errors
async def generate_release_title(
    ctx: Context,
    owner: Owner,
    repo: Repo,
    base: Annotated[str, Field(description="Release target branch (e.g. 'main')")],
    head: Annotated[str, Field(description="Branch being released (e.g. 'dev')")],
) -> str:
    """Suggest a release pull request title from what was merged between two refs.

    Args:
        ctx: The FastMCP context.
        owner: Repository owner.
        repo: Repository name.
        base: Release target branch.
        head: Branch being released.

    Returns:
        JSON string with the suggested ``title``.
    """
    github = await get_github_fetcher(ctx)
    return _dumps({"title": github.generate_release_title(owner, repo, base, head)})
