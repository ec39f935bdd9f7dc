"""Tests for the GitHub REST client and configuration."""

from unittest.mock import MagicMock

import pytest
from requests import Response
from requests.exceptions import HTTPError

from mcp_linear.exceptions import MCPLinearAPIError, MCPLinearAuthenticationError
from mcp_linear.github import GitHubClient, GitHubConfig, is_github_enabled
from tests.utils.factories import ErrorResponseFactory


def _response(status_code: int, body=None, content: bytes = b"{}") -> MagicMock:
    response = MagicMock(spec=Response)
    response.status_code = status_code
    response.ok = status_code < 400
    response.content = content
    response.reason = "Reason"
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(response=response)
    return response


@pytest.fixture
def client(github_config) -> GitHubClient:
    client = GitHubClient(config=github_config)
    client.session = MagicMock()
    return client


def test_bearer_token_header(github_config):
    client = GitHubClient(config=github_config)

    assert client.session.headers["Authorization"] == f"Bearer {github_config.token}"


def test_get_returns_json(client):
    client.session.request.return_value = _response(200, {"number": 1})

    assert client._get("/repos/acme/app/pulls/1") == {"number": 1}
    args, kwargs = client.session.request.call_args
    assert args == ("GET", "https://api.github.com/repos/acme/app/pulls/1")


def test_empty_body_returns_none(client):
    client.session.request.return_value = _response(204, content=b"")

    assert client._patch("/repos/acme/app/pulls/1", json_data={}) is None


def test_error_message_passed_through(client):
    body = ErrorResponseFactory.github_error("Validation Failed")
    body["errors"] = [{"message": "A pull request already exists for acme:feature"}]
    client.session.request.return_value = _response(422, body)

    with pytest.raises(MCPLinearAPIError) as exc:
        client._post("/repos/acme/app/pulls", json_data={})

    assert exc.value.status_code == 422
    assert str(exc.value) == (
        "GitHub API error (422): Validation Failed: "
        "A pull request already exists for acme:feature"
    )


def test_auth_failure(client):
    client.session.request.return_value = _response(401, {"message": "Bad credentials"})

    with pytest.raises(MCPLinearAuthenticationError, match="GitHub API"):
        client._get("/user")


def test_forbidden_keeps_github_message(client):
    body = ErrorResponseFactory.github_error("API rate limit exceeded for user ID 1.")
    client.session.request.return_value = _response(403, body)

    with pytest.raises(MCPLinearAPIError) as exc:
        client._get("/repos/acme/app/pulls/1")

    assert not isinstance(exc.value, MCPLinearAuthenticationError)
    assert exc.value.status_code == 403
    assert str(exc.value) == (
        "GitHub API error (403): API rate limit exceeded for user ID 1."
    )


class TestGitHubConfig:
    def test_missing_token(self, clean_env):
        with pytest.raises(ValueError, match="GITHUB_ENABLED=false"):
            GitHubConfig.from_env()

    def test_defaults(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghp_abc")

        config = GitHubConfig.from_env()

        assert config.url == "https://api.github.com"
        assert config.default_base_branch == "dev"

    def test_base_branch_override(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghp_abc")
        clean_env.setenv("GITHUB_DEFAULT_BASE_BRANCH", "main")

        assert GitHubConfig.from_env().default_base_branch == "main"


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, True), ("true", True), ("false", False), ("0", False), ("no", False)],
)
def test_is_github_enabled(clean_env, value, expected):
    if value is not None:
        clean_env.setenv("GITHUB_ENABLED", value)

    assert is_github_enabled() is expected
