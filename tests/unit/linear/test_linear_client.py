"""Tests for the Linear GraphQL client."""

from unittest.mock import MagicMock

import pytest
from requests import Response
from requests.exceptions import ConnectionError, HTTPError

from mcp_linear.exceptions import MCPLinearAPIError, MCPLinearAuthenticationError
from mcp_linear.linear import LinearClient
from tests.utils.factories import ErrorResponseFactory


def _response(status_code: int, body=None) -> MagicMock:
    response = MagicMock(spec=Response)
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError("No JSON")
    else:
        response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(response=response)
    return response


@pytest.fixture
def client(linear_config) -> LinearClient:
    client = LinearClient(config=linear_config)
    client.session = MagicMock()
    return client


def test_session_sends_api_key(linear_config):
    client = LinearClient(config=linear_config)

    assert client.session.headers["Authorization"] == linear_config.api_key


def test_execute_returns_data(client):
    client.session.post.return_value = _response(200, {"data": {"teams": {"nodes": []}}})

    result = client.execute("query { teams { nodes { id } } }", {"first": 1})

    assert result == {"teams": {"nodes": []}}
    _, kwargs = client.session.post.call_args
    assert kwargs["json"] == {
        "query": "query { teams { nodes { id } } }",
        "variables": {"first": 1},
    }


def test_execute_omits_empty_variables(client):
    client.session.post.return_value = _response(200, {"data": {}})

    client.execute("query { viewer { id } }")

    assert "variables" not in client.session.post.call_args.kwargs["json"]


def test_execute_raises_graphql_errors_verbatim(client):
    body = {
        "errors": [{"message": "Entity not found"}, {"message": "Argument invalid"}]
    }
    client.session.post.return_value = _response(200, body)

    with pytest.raises(MCPLinearAPIError) as exc:
        client.execute("query { issue(id: \"x\") { id } }")

    assert str(exc.value) == "Entity not found; Argument invalid"


def test_execute_graphql_errors_on_http_400(client):
    client.session.post.return_value = _response(
        400, ErrorResponseFactory.graphql_error("Field 'foo' doesn't exist")
    )

    with pytest.raises(MCPLinearAPIError, match="Field 'foo' doesn't exist") as exc:
        client.execute("query { foo }")
    assert exc.value.status_code == 400


@pytest.mark.parametrize("status_code", [401, 403])
def test_execute_auth_failure(client, status_code):
    client.session.post.return_value = _response(status_code, {"errors": []})

    with pytest.raises(MCPLinearAuthenticationError, match="Linear API"):
        client.execute("query { viewer { id } }")


def test_execute_non_json_error_response(client):
    client.session.post.return_value = _response(502)

    with pytest.raises(HTTPError):
        client.execute("query { viewer { id } }")


def test_execute_non_json_success_response(client):
    client.session.post.return_value = _response(200)

    with pytest.raises(MCPLinearAPIError, match="non-JSON"):
        client.execute("query { viewer { id } }")


def test_fetch_bytes(client):
    response = _response(200, {})
    response.content = b"\x89PNG"
    client.session.get.return_value = response

    assert client.fetch_bytes("https://uploads.linear.app/a.png") == b"\x89PNG"


def test_fetch_bytes_failure_returns_none(client):
    client.session.get.side_effect = ConnectionError("boom")

    assert client.fetch_bytes("https://uploads.linear.app/a.png") is None
