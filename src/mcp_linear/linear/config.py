"""Configuration module for Linear API interactions."""

import logging
import os
from dataclasses import dataclass

from .constants import IMAGE_ANALYSIS_MODES, LINEAR_API_URL

logger = logging.getLogger("mcp-linear.linear")


@dataclass
class LinearConfig:
    """Configuration for Linear API access.

    Linear personal API keys are sent as-is in the ``Authorization`` header.
    """

    api_key: str
    url: str = LINEAR_API_URL
    image_analysis: str = "placeholder"
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.api_key:
            error_msg = (
                "LINEAR_API_KEY is required. Create a personal API key under "
                "Linear Settings > API and export it as LINEAR_API_KEY."
            )
            raise ValueError(error_msg)
        if self.image_analysis not in IMAGE_ANALYSIS_MODES:
            error_msg = (
                f"Invalid LINEAR_IMAGE_ANALYSIS '{self.image_analysis}'. "
                f"Expected one of: {', '.join(sorted(IMAGE_ANALYSIS_MODES))}"
            )
            raise ValueError(error_msg)

    @classmethod
    def from_env(cls) -> "LinearConfig":
        """Create configuration from environment variables.

        Environment variables:
            LINEAR_API_KEY: Linear personal API key (required)
            LINEAR_API_URL: GraphQL endpoint (default: Linear cloud)
            LINEAR_IMAGE_ANALYSIS: "placeholder" (default) or "encode"
            LINEAR_TIMEOUT: Request timeout in seconds (default: none)

        Returns:
            LinearConfig instance

        Raises:
            ValueError: If required configuration is missing or invalid
        """
        timeout = os.getenv("LINEAR_TIMEOUT")
        try:
            timeout_value = float(timeout) if timeout else None
        except ValueError:
            logger.warning(f"Ignoring non-numeric LINEAR_TIMEOUT value: {timeout}")
            timeout_value = None

        return cls(
            api_key=os.getenv("LINEAR_API_KEY", ""),
            url=os.getenv("LINEAR_API_URL", LINEAR_API_URL).rstrip("/"),
            image_analysis=os.getenv("LINEAR_IMAGE_ANALYSIS", "placeholder")
            .strip()
            .lower(),
            timeout=timeout_value,
        )
