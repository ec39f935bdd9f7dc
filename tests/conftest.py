"""Shared fixtures for the MCP Linear test suite."""

import pytest

from mcp_linear.github import GitHubConfig
from mcp_linear.linear import LinearConfig


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def linear_config() -> LinearConfig:
    return LinearConfig(api_key="lin_api_test_key_0123456789")


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(token="ghp_test_token_0123456789")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the server reads from the environment."""
    for name in (
        "LINEAR_API_KEY",
        "LINEAR_API_URL",
        "LINEAR_IMAGE_ANALYSIS",
        "LINEAR_TIMEOUT",
        "GITHUB_TOKEN",
        "GITHUB_ENABLED",
        "GITHUB_API_URL",
        "GITHUB_DEFAULT_BASE_BRANCH",
        "READ_ONLY_MODE",
        "MCP_LINEAR_LOG_TO_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
