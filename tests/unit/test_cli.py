"""Tests for the command line entry point."""

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from mcp_linear import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def no_dotenv():
    with patch("mcp_linear.load_dotenv"):
        yield


def test_missing_api_key_exits_with_error(runner, clean_env):
    result = runner.invoke(main, [])

    assert result.exit_code == 1
    assert "LINEAR_API_KEY" in result.output


def test_options_passed_to_server(runner, clean_env):
    clean_env.setenv("LINEAR_API_KEY", "lin_api_from_env")
    server = MagicMock()
    with (
        patch(
            "mcp_linear.servers.create_server_from_env", return_value=server
        ) as create,
        patch("mcp_linear.servers.run_server", new_callable=AsyncMock) as run,
    ):
        result = runner.invoke(
            main,
            [
                "--linear-api-key",
                "lin_api_abc",
                "--no-github",
                "--read-only",
                "--transport",
                "http",
                "--port",
                "9000",
            ],
        )

    assert result.exit_code == 0, result.output
    assert os.environ["LINEAR_API_KEY"] == "lin_api_abc"
    create.assert_called_once_with(read_only=True, github_enabled=False)
    run.assert_awaited_once_with(server, transport="http", host="127.0.0.1", port=9000)


def test_server_error_exits_with_error(runner, clean_env):
    clean_env.setenv("LINEAR_API_KEY", "lin_api_from_env")
    with (
        patch("mcp_linear.servers.create_server_from_env", return_value=MagicMock()),
        patch(
            "mcp_linear.servers.run_server",
            new_callable=AsyncMock,
            side_effect=RuntimeError("port in use"),
        ),
    ):
        result = runner.invoke(main, ["--linear-api-key", "lin_api_abc"])

    assert result.exit_code == 1
