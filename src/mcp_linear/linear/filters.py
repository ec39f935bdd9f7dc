"""
Builders for Linear GraphQL filter objects.

Each builder returns a one-key filter fragment; ``compose_filters`` merges
fragments into the single object passed as the ``filter`` argument.
Issues and projects are filtered by team differently: issues have a
``team`` reference, projects are shared and use ``accessibleTeams``.
"""

from typing import Any

Filter = dict[str, Any]


def id_equals(field: str, value: str) -> Filter:
    return {field: {"id": {"eq": value}}}


def name_equals(field: str, value: str) -> Filter:
    return {field: {"name": {"eq": value}}}


def issue_team_filter(team_id: str) -> Filter:
    return id_equals("team", team_id)


def issue_assignee_filter(assignee_id: str) -> Filter:
    return id_equals("assignee", assignee_id)


def issue_state_filter(status: str) -> Filter:
    return name_equals("state", status)


def project_team_filter(team_id: str) -> Filter:
    return {"accessibleTeams": {"some": {"id": {"eq": team_id}}}}


def compose_filters(*fragments: Filter | None) -> Filter:
    """Merge filter fragments into one filter object.

    ``None`` fragments are skipped. Two fragments for the same field are
    rejected rather than silently overwritten.

    Raises:
        ValueError: If two fragments constrain the same field
    """
    composed: Filter = {}
    for fragment in fragments:
        if not fragment:
            continue
        for key, value in fragment.items():
            if key in composed:
                raise ValueError(f"Conflicting filters for field '{key}'")
            composed[key] = value
    return composed


def build_issue_filter(
    team_id: str | None = None,
    assignee_id: str | None = None,
    status: str | None = None,
) -> Filter:
    return compose_filters(
        issue_team_filter(team_id) if team_id else None,
        issue_assignee_filter(assignee_id) if assignee_id else None,
        issue_state_filter(status) if status else None,
    )


def build_project_filter(team_id: str | None = None) -> Filter:
    return compose_filters(project_team_filter(team_id) if team_id else None)
