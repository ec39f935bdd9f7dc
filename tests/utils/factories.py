"""Test data factories for creating consistent test objects."""

from typing import Any


class LinearIssueFactory:
    """Factory for Linear GraphQL ``Issue`` nodes."""

    @staticmethod
    def create(identifier: str = "ENG-123", **overrides) -> dict[str, Any]:
        """Create a Linear issue node with default values."""
        defaults = {
            "id": "9b5a4d3e-1c2f-4e6a-8b7c-0d1e2f3a4b5c",
            "identifier": identifier,
            "title": "Test Issue Title",
            "description": "Test issue description",
            "priority": 2,
            "priorityLabel": "High",
            "url": f"https://linear.app/acme/issue/{identifier}",
            "branchName": f"alice/{identifier.lower()}-test-issue-title",
            "createdAt": "2024-01-01T12:00:00.000Z",
            "updatedAt": "2024-01-02T12:00:00.000Z",
            "startedAt": None,
            "completedAt": None,
            "canceledAt": None,
            "dueDate": None,
            "estimate": None,
            "team": {"id": "team-1", "name": "Engineering", "key": "ENG"},
        }
        return deep_merge(defaults, overrides)

    @staticmethod
    def create_summary(identifier: str = "ENG-123", **overrides) -> dict[str, Any]:
        """Create an issue node as selected by list and search queries."""
        defaults = {
            "id": f"id-{identifier}",
            "identifier": identifier,
            "title": f"Issue {identifier}",
            "priority": 3,
            "url": f"https://linear.app/acme/issue/{identifier}",
            "state": {"id": "state-1", "name": "In Progress", "type": "started"},
            "assignee": {"id": "user-1", "name": "alice", "displayName": "Alice"},
        }
        return deep_merge(defaults, overrides)

    @staticmethod
    def relations(**overrides) -> dict[str, Any]:
        """Resolved relation values keyed by relation name."""
        defaults: dict[str, Any] = {
            "state": {"id": "state-1", "name": "Todo", "type": "unstarted"},
            "assignee": {"id": "user-1", "name": "alice", "email": "alice@example.com"},
            "creator": {"id": "user-2", "name": "bob", "email": "bob@example.com"},
            "team": {"id": "team-1", "name": "Engineering", "key": "ENG"},
            "project": {"id": "project-1", "name": "Roadmap", "state": "started"},
            "parent": None,
            "cycle": {"id": "cycle-1", "name": None, "number": 7},
            "labels": {"nodes": [{"id": "label-1", "name": "bug", "color": "#f00"}]},
            "comments": {
                "nodes": [
                    {
                        "id": "comment-1",
                        "body": "Looks good",
                        "createdAt": "2024-01-03T00:00:00.000Z",
                        "user": {"id": "user-2", "name": "bob"},
                    }
                ]
            },
            "attachments": {
                "nodes": [
                    {"id": "att-1", "title": "Screenshot", "url": "https://cdn.example.com/shot.png?v=2"},
                    {"id": "att-2", "title": "Spec", "url": "https://docs.example.com/spec.pdf"},
                ]
            },
        }
        defaults.update(overrides)
        return defaults


class GitHubPullRequestFactory:
    """Factory for GitHub REST ``pulls`` payloads."""

    @staticmethod
    def create(number: int = 42, **overrides) -> dict[str, Any]:
        defaults = {
            "number": number,
            "title": "ENG-123: Test Issue Title",
            "body": "Implements the feature.",
            "html_url": f"https://github.com/acme/app/pull/{number}",
            "state": "open",
            "draft": False,
            "head": {"ref": "alice/eng-123-test-issue-title"},
            "base": {"ref": "dev"},
            "user": {"login": "alice"},
            "merged_at": None,
            "merge_commit_sha": None,
            "created_at": "2024-01-01T12:00:00Z",
            "updated_at": "2024-01-01T12:00:00Z",
        }
        return deep_merge(defaults, overrides)


class ErrorResponseFactory:
    """Factory for remote error payloads."""

    @staticmethod
    def graphql_error(message: str = "Entity not found") -> dict[str, Any]:
        return {"errors": [{"message": message, "extensions": {"code": "INVALID_INPUT"}}]}

    @staticmethod
    def github_error(message: str = "Not Found") -> dict[str, Any]:
        return {"message": message, "documentation_url": "https://docs.github.com/rest"}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result
