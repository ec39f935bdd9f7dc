"""Constants for the Linear GraphQL API."""

LINEAR_API_URL = "https://api.linear.app/graphql"

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 250

IMAGE_ANALYSIS_MODES = frozenset({"placeholder", "encode"})

USER_FIELDS = "id name displayName email"
STATE_FIELDS = "id name type"

# Scalar fields of an issue, without any reference that needs another hop.
ISSUE_SCALAR_FIELDS = """
    id
    identifier
    title
    description
    priority
    priorityLabel
    url
    branchName
    createdAt
    updatedAt
    startedAt
    completedAt
    canceledAt
    dueDate
    estimate
"""

# Summary selection used by list and search, with state and assignee inline.
ISSUE_SUMMARY_FIELDS = f"""
    id
    identifier
    title
    priority
    url
    state {{ {STATE_FIELDS} }}
    assignee {{ {USER_FIELDS} }}
"""

# Selection for each related reference of an issue, fetched one query per
# relation when building the detail record.
ISSUE_RELATION_FIELDS: dict[str, str] = {
    "state": f"state {{ {STATE_FIELDS} }}",
    "assignee": f"assignee {{ {USER_FIELDS} }}",
    "creator": f"creator {{ {USER_FIELDS} }}",
    "team": "team { id name key description }",
    "project": "project { id name state url }",
    "parent": "parent { id identifier title }",
    "cycle": "cycle { id name number }",
    "labels": "labels { nodes { id name color } }",
    "comments": f"comments {{ nodes {{ id body createdAt user {{ {USER_FIELDS} }} }} }}",
    "attachments": "attachments { nodes { id title url } }",
}

ISSUE_RELATIONS: tuple[str, ...] = tuple(ISSUE_RELATION_FIELDS)
