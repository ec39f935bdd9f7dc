"""Configuration module for GitHub API interactions."""

import logging
import os
from dataclasses import dataclass

from ..utils.env import is_env_falsy

logger = logging.getLogger("mcp-linear.github")

GITHUB_API_URL = "https://api.github.com"
DEFAULT_BASE_BRANCH = "dev"


def is_github_enabled() -> bool:
    """GitHub tools are on unless GITHUB_ENABLED is explicitly false."""
    return not is_env_falsy("GITHUB_ENABLED", "true")


@dataclass
class GitHubConfig:
    """Configuration for GitHub REST API access."""

    token: str
    url: str = GITHUB_API_URL
    default_base_branch: str = DEFAULT_BASE_BRANCH
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.token:
            error_msg = (
                "GITHUB_TOKEN is required while GitHub integration is enabled. "
                "Export a personal access token with repo scope, or disable the "
                "integration with GITHUB_ENABLED=false."
            )
            raise ValueError(error_msg)
        if not self.default_base_branch:
            raise ValueError("GITHUB_DEFAULT_BASE_BRANCH must not be empty")

    @classmethod
    def from_env(cls) -> "GitHubConfig":
        """Create configuration from environment variables.

        Environment variables:
            GITHUB_TOKEN: Personal access token (required)
            GITHUB_API_URL: REST API root (default: https://api.github.com)
            GITHUB_DEFAULT_BASE_BRANCH: Base branch for new branches (default: dev)

        Returns:
            GitHubConfig instance

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        return cls(
            token=os.getenv("GITHUB_TOKEN", ""),
            url=os.getenv("GITHUB_API_URL", GITHUB_API_URL).rstrip("/"),
            default_base_branch=os.getenv(
                "GITHUB_DEFAULT_BASE_BRANCH", DEFAULT_BASE_BRANCH
            ),
        )
