"""Linear FastMCP server instance and tool definitions."""

import asyncio
import json
import logging
from typing import Annotated

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_linear.linear.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from mcp_linear.servers.dependencies import get_image_analyzer, get_linear_fetcher
from mcp_linear.utils.decorators import check_write_access, handle_tool_errors
from mcp_linear.utils.markdown import analyze_images, scan_markdown_images
from mcp_linear.utils.media import is_image_url

logger = logging.getLogger(__name__)

linear_mcp = FastMCP(
    name="Linear MCP Service",
    instructions="Provides tools for interacting with the Linear issue tracker.",
)

PageSize = Annotated[
    int,
    Field(
        description=f"Maximum number of results (default: {DEFAULT_PAGE_SIZE}, max: {MAX_PAGE_SIZE})",
        ge=1,
        le=MAX_PAGE_SIZE,
    ),
]

Priority = Annotated[
    int | None,
    Field(
        description="Priority: 0 = none, 1 = urgent, 2 = high, 3 = medium, 4 = low",
        ge=0,
        le=4,
    ),
]


def _dumps(data: object) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@linear_mcp.tool(
    tags={"linear", "write"},
    annotations={"title": "Create Issue", "destructiveHint": True},
)
@handle_tool_errors
@check_write_access
async def create_issue(
    ctx: Context,
    title: Annotated[str, Field(description="Issue title", min_length=1)],
    team_id: Annotated[
        str, Field(description="ID of the team the issue belongs to", min_length=1)
    ],
    description: Annotated[
        str | None, Field(description="Issue description in markdown")
    ] = None,
    assignee_id: Annotated[
        str | None, Field(description="ID of the user to assign the issue to")
    ] = None,
    priority: Priority = None,
    labels: Annotated[
        list[str] | None, Field(description="IDs of labels to attach to the issue")
    ] = None,
) -> str:
    """Create a new issue in Linear.

    Args:
        ctx: The FastMCP context.
        title: Issue title.
        team_id: Team ID.
        description: Markdown description.
        assignee_id: Assignee user ID.
        priority: Priority from 0 to 4.
        labels: Label IDs.

    Returns:
        JSON string representing the created issue.
    """
    linear = await get_linear_fetcher(ctx)
    issue = linear.create_issue(
        title=title,
        team_id=team_id,
        description=description,
        assignee_id=assignee_id,
        priority=priority,
        label_ids=labels,
    )
    return _dumps(issue.to_simplified_dict())


@linear_mcp.tool(
    tags={"linear", "read"},
    annotations={"title": "List Issues", "readOnlyHint": True},
)
@handle_tool_errors
async def list_issues(
    ctx: Context,
    team_id: Annotated[str | None, Field(description="Only issues of this team")] = None,
    assignee_id: Annotated[
        str | None, Field(description="Only issues assigned to this user")
    ] = None,
    status: Annotated[
        str | None,
        Field(description="Only issues in this workflow state, by name (e.g. 'In Progress')"),
    ] = None,
    first: PageSize = DEFAULT_PAGE_SIZE,
) -> str:
    """List issues with optional filters.

    Args:
        ctx: The FastMCP context.
        team_id: Team filter.
        assignee_id: Assignee filter.
        status: Workflow state name filter.
        first: Page size.

    Returns:
        JSON array of issue summaries.
    """
    linear = await get_linear_fetcher(ctx)
    issues = linear.list_issues(
        team_id=team_id, assignee_id=assignee_id, status=status, first=first
    )
    return _dumps([issue.to_summary_dict() for issue in issues])


@linear_mcp.tool(
    tags={"linear", "write"},
    annotations={"title": "Update Issue", "destructiveHint": True},
)
@handle_tool_errors
@check_write_access
async def update_issue(
    ctx: Context,
    issue_id: Annotated[
        str, Field(description="Issue ID or identifier (e.g. 'ENG-123')", min_length=1)
    ],
    title: Annotated[str | None, Field(description="New title")] = None,
    description: Annotated[
        str | None, Field(description="New description in markdown")
    ] = None,
    status: Annotated[
        str | None,
        Field(description="New workflow state, as a state ID or a state name"),
    ] = None,
    assignee_id: Annotated[
        str | None, Field(description="ID of the new assignee")
    ] = None,
    priority: Priority = None,
) -> str:
    """Update an existing issue. Only the fields given are changed.

    Args:
        ctx: The FastMCP context.
        issue_id: Issue ID or identifier.
        title: New title.
        description: New description.
        status: New state ID or name.
        assignee_id: New assignee.
        priority: New priority.

    Returns:
        JSON string representing the updated issue.
    """
    linear = await get_linear_fetcher(ctx)
    issue = linear.update_issue(
        issue_id=issue_id,
        title=title,
        description=description,
        status=status,
        assignee_id=assignee_id,
        priority=priority,
    )
    return _dumps(issue.to_simplified_dict())


@linear_mcp.tool(
    tags={"linear", "read"},
    annotations={"title": "Get Issue", "readOnlyHint": True},
)
@handle_tool_errors
async def get_issue(
    ctx: Context,
    issue_id: Annotated[
        str, Field(description="Issue ID or identifier (e.g. 'ENG-123')", min_length=1)
    ],
) -> str:
    """Get full details of an issue, including its comments, attachments and images.

    Markdown images in the description are returned as ``embedded_images``
    and attachments pointing at image files as ``image_attachments``.

    Args:
        ctx: The FastMCP context.
        issue_id: Issue ID or identifier.

    Returns:
        JSON string representing the issue.
    """
    linear = await get_linear_fetcher(ctx)
    analyzer = get_image_analyzer(ctx)

    issue = await linear.get_issue_details(issue_id)
    image_urls = [a.url for a in issue.attachments if is_image_url(a.url)]

    result = issue.to_simplified_dict()
    result["embedded_images"] = await asyncio.to_thread(
        scan_markdown_images, issue.description, analyzer
    )
    result["image_attachments"] = await asyncio.to_thread(
        analyze_images, image_urls, analyzer
    )
    return _dumps(result)


@linear_mcp.tool(
    tags={"linear", "read"},
    annotations={"title": "List Teams", "readOnlyHint": True},
)
@handle_tool_errors
async def list_teams(ctx: Context) -> str:
    """List all teams in the workspace.

    Args:
        ctx: The FastMCP context.

    Returns:
        JSON array of teams.
    """
    linear = await get_linear_fetcher(ctx)
    return _dumps([team.to_simplified_dict() for team in linear.list_teams()])


@linear_mcp.tool(
    tags={"linear", "read"},
    annotations={"title": "List Projects", "readOnlyHint": True},
)
@handle_tool_errors
async def list_projects(
    ctx: Context,
    team_id: Annotated[
        str | None, Field(description="Only projects accessible to this team")
    ] = None,
    first: PageSize = DEFAULT_PAGE_SIZE,
) -> str:
    """List projects, optionally restricted to one team.

    Args:
        ctx: The FastMCP context.
        team_id: Team filter.
        first: Page size.

    Returns:
        JSON array of projects.
    """
    linear = await get_linear_fetcher(ctx)
    projects = linear.list_projects(team_id=team_id, first=first)
    return _dumps([project.to_simplified_dict() for project in projects])


@linear_mcp.tool(
    tags={"linear", "read"},
    annotations={"title": "Search Issues", "readOnlyHint": True},
)
@handle_tool_errors
async def search_issues(
    ctx: Context,
    query: Annotated[str, Field(description="Free-text search query", min_length=1)],
    first: PageSize = DEFAULT_PAGE_SIZE,
) -> str:
    """Search for issues using a text query.

    Args:
        ctx: The FastMCP context.
        query: Search text, passed to Linear unchanged.
        first: Page size.

    Returns:
        JSON array of matching issue summaries with search metadata.
    """
    linear = await get_linear_fetcher(ctx)
    issues = linear.search_issues(query, first=first)
    return _dumps([issue.to_summary_dict() for issue in issues])
