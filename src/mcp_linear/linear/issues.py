"""Module for Linear issue operations."""

import asyncio
import logging
import re
from typing import Any

from ..exceptions import MCPLinearAPIError, MCPLinearNotFoundError
from ..models.linear import LinearIssue, LinearState
from .client import LinearClient
from .constants import (
    DEFAULT_PAGE_SIZE,
    ISSUE_RELATION_FIELDS,
    ISSUE_RELATIONS,
    ISSUE_SCALAR_FIELDS,
    ISSUE_SUMMARY_FIELDS,
    STATE_FIELDS,
)
from .filters import build_issue_filter

logger = logging.getLogger("mcp-linear.linear")

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

# Detail selection returned by create/update mutations.
ISSUE_MUTATION_FIELDS = f"""
    {ISSUE_SCALAR_FIELDS}
    {ISSUE_RELATION_FIELDS["state"]}
    {ISSUE_RELATION_FIELDS["assignee"]}
    {ISSUE_RELATION_FIELDS["team"]}
    {ISSUE_RELATION_FIELDS["labels"]}
"""

GET_ISSUE_QUERY = f"""
query Issue($id: String!) {{
  issue(id: $id) {{
    {ISSUE_SCALAR_FIELDS}
    team {{ id name key }}
  }}
}}
"""

CREATE_ISSUE_MUTATION = f"""
mutation IssueCreate($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{ {ISSUE_MUTATION_FIELDS} }}
  }}
}}
"""

UPDATE_ISSUE_MUTATION = f"""
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {{
  issueUpdate(id: $id, input: $input) {{
    success
    issue {{ {ISSUE_MUTATION_FIELDS} }}
  }}
}}
"""

LIST_ISSUES_QUERY = f"""
query Issues($first: Int!, $filter: IssueFilter) {{
  issues(first: $first, filter: $filter) {{
    nodes {{ {ISSUE_SUMMARY_FIELDS} }}
  }}
}}
"""

SEARCH_ISSUES_QUERY = f"""
query SearchIssues($term: String!, $first: Int!) {{
  searchIssues(term: $term, first: $first) {{
    nodes {{
      {ISSUE_SUMMARY_FIELDS}
      metadata
    }}
  }}
}}
"""

TEAM_STATES_QUERY = f"""
query TeamStates($id: String!) {{
  team(id: $id) {{
    states {{ nodes {{ {STATE_FIELDS} }} }}
  }}
}}
"""


def _relation_query(relation: str) -> str:
    return (
        "query IssueRelation($id: String!) { issue(id: $id) { "
        f"{ISSUE_RELATION_FIELDS[relation]}"
        " } }"
    )


class IssuesMixin(LinearClient):
    """Mixin for Linear issue operations."""

    def _get_issue_data(self, issue_id: str) -> dict[str, Any]:
        """Fetch the scalar fields of an issue by UUID or identifier (``ENG-123``).

        Raises:
            MCPLinearNotFoundError: If no issue matches ``issue_id``
        """
        try:
            data = self.execute(GET_ISSUE_QUERY, {"id": issue_id})
        except MCPLinearAPIError as e:
            if "not found" in str(e).lower():
                raise MCPLinearNotFoundError(f"Issue {issue_id} not found") from e
            raise

        issue = data.get("issue")
        if not issue:
            raise MCPLinearNotFoundError(f"Issue {issue_id} not found")
        return issue

    def get_issue(self, issue_id: str) -> LinearIssue:
        """
        Get an issue without resolving its related references.

        Args:
            issue_id: Issue UUID or identifier (e.g. ``ENG-123``)

        Returns:
            LinearIssue with scalar fields and team

        Raises:
            MCPLinearNotFoundError: If the issue does not exist
        """
        return LinearIssue.from_api_response(self._get_issue_data(issue_id))

    def get_issue_relation(self, issue_id: str, relation: str) -> Any:
        """Fetch a single related reference or collection of an issue."""
        data = self.execute(_relation_query(relation), {"id": issue_id})
        issue = data.get("issue") or {}
        return issue.get(relation)

    async def get_issue_details(self, issue_id: str) -> LinearIssue:
        """
        Get an issue with every related reference resolved.

        The issue is looked up first, then all relations are requested
        concurrently and joined before the record is built.

        Args:
            issue_id: Issue UUID or identifier

        Returns:
            Fully populated LinearIssue

        Raises:
            MCPLinearNotFoundError: If the issue does not exist
        """
        issue_data = await asyncio.to_thread(self._get_issue_data, issue_id)

        tasks = [
            asyncio.to_thread(self.get_issue_relation, issue_data["id"], relation)
            for relation in ISSUE_RELATIONS
        ]
        relations = await asyncio.gather(*tasks)

        merged = {**issue_data, **dict(zip(ISSUE_RELATIONS, relations, strict=True))}
        return LinearIssue.from_api_response(merged)

    def create_issue(
        self,
        title: str,
        team_id: str,
        description: str | None = None,
        assignee_id: str | None = None,
        priority: int | None = None,
        label_ids: list[str] | None = None,
    ) -> LinearIssue:
        """
        Create a new issue.

        Args:
            title: Issue title
            team_id: Team the issue belongs to
            description: Markdown description
            assignee_id: User to assign
            priority: 0 (none) to 4 (low)
            label_ids: Label ids to attach

        Returns:
            The created LinearIssue

        Raises:
            ValueError: If title or team_id is empty
            MCPLinearAPIError: If Linear rejects the mutation
        """
        if not title or not title.strip():
            raise ValueError("Issue title is required")
        if not team_id:
            raise ValueError("team_id is required")

        issue_input: dict[str, Any] = {"title": title, "teamId": team_id}
        if description is not None:
            issue_input["description"] = description
        if assignee_id:
            issue_input["assigneeId"] = assignee_id
        if priority is not None:
            issue_input["priority"] = priority
        if label_ids:
            issue_input["labelIds"] = label_ids

        logger.debug(f"Creating issue in team {team_id}: {title}")
        data = self.execute(CREATE_ISSUE_MUTATION, {"input": issue_input})
        result = data.get("issueCreate") or {}
        if not result.get("success") or not result.get("issue"):
            raise MCPLinearAPIError("Linear did not create the issue")
        return LinearIssue.from_api_response(result["issue"])

    def get_team_states(self, team_id: str) -> list[LinearState]:
        """Return the workflow states of a team."""
        data = self.execute(TEAM_STATES_QUERY, {"id": team_id})
        team = data.get("team") or {}
        nodes = (team.get("states") or {}).get("nodes") or []
        return [LinearState.from_api_response(node) for node in nodes]

    def resolve_state_id(self, team_id: str | None, status: str) -> str:
        """
        Turn a status given as a state id or a state name into a state id.

        Names are matched case-insensitively against the team's workflow
        states.

        Raises:
            ValueError: If the name matches no state of the team
        """
        if UUID_PATTERN.match(status):
            return status
        if not team_id:
            raise ValueError(
                f"Cannot resolve status '{status}': the issue has no team"
            )

        states = self.get_team_states(team_id)
        wanted = status.strip().lower()
        for state in states:
            if state.name.lower() == wanted:
                return state.id

        available = ", ".join(state.name for state in states) or "none"
        raise ValueError(
            f"Unknown status '{status}'. Available states: {available}"
        )

    def update_issue(
        self,
        issue_id: str,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        assignee_id: str | None = None,
        priority: int | None = None,
    ) -> LinearIssue:
        """
        Update an existing issue with the supplied fields only.

        Args:
            issue_id: Issue UUID or identifier
            title: New title
            description: New markdown description
            status: Workflow state id or state name
            assignee_id: New assignee
            priority: 0 (none) to 4 (low)

        Returns:
            The updated LinearIssue

        Raises:
            ValueError: If nothing to update was supplied or the status is unknown
            MCPLinearNotFoundError: If the issue does not exist
            MCPLinearAPIError: If Linear rejects the mutation
        """
        fields = {
            "title": title,
            "description": description,
            "status": status,
            "assignee_id": assignee_id,
            "priority": priority,
        }
        if all(value is None for value in fields.values()):
            raise ValueError("At least one field to update must be provided")

        existing = self._get_issue_data(issue_id)

        issue_input: dict[str, Any] = {}
        if title is not None:
            issue_input["title"] = title
        if description is not None:
            issue_input["description"] = description
        if status is not None:
            team_id = (existing.get("team") or {}).get("id")
            issue_input["stateId"] = self.resolve_state_id(team_id, status)
        if assignee_id is not None:
            issue_input["assigneeId"] = assignee_id
        if priority is not None:
            issue_input["priority"] = priority

        logger.debug(f"Updating issue {existing['id']}: {sorted(issue_input)}")
        data = self.execute(
            UPDATE_ISSUE_MUTATION, {"id": existing["id"], "input": issue_input}
        )
        result = data.get("issueUpdate") or {}
        if not result.get("success") or not result.get("issue"):
            raise MCPLinearAPIError(f"Linear did not update issue {issue_id}")
        return LinearIssue.from_api_response(result["issue"])

    def list_issues(
        self,
        team_id: str | None = None,
        assignee_id: str | None = None,
        status: str | None = None,
        first: int = DEFAULT_PAGE_SIZE,
    ) -> list[LinearIssue]:
        """
        List one page of issues, optionally filtered.

        Args:
            team_id: Only issues of this team
            assignee_id: Only issues assigned to this user
            status: Only issues in the workflow state with this name
            first: Page size

        Returns:
            Issues with state and assignee resolved
        """
        variables: dict[str, Any] = {"first": first}
        issue_filter = build_issue_filter(team_id, assignee_id, status)
        if issue_filter:
            variables["filter"] = issue_filter

        data = self.execute(LIST_ISSUES_QUERY, variables)
        nodes = (data.get("issues") or {}).get("nodes") or []
        return [LinearIssue.from_api_response(node) for node in nodes]

    def search_issues(
        self, query: str, first: int = DEFAULT_PAGE_SIZE
    ) -> list[LinearIssue]:
        """
        Full-text search over issues.

        The query is forwarded to Linear untouched.

        Raises:
            ValueError: If the query is empty
        """
        if not query or not query.strip():
            raise ValueError("Search query is required")

        data = self.execute(SEARCH_ISSUES_QUERY, {"term": query, "first": first})
        nodes = (data.get("searchIssues") or {}).get("nodes") or []
        return [LinearIssue.from_api_response(node) for node in nodes]
