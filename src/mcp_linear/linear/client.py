"""Base client module for Linear API interactions."""

import logging
from typing import Any

from requests import Session
from requests.exceptions import RequestException

from ..exceptions import MCPLinearAPIError
from ..utils.decorators import handle_auth_errors
from ..utils.logging import mask_sensitive
from .config import LinearConfig

logger = logging.getLogger("mcp-linear.linear")


class LinearClient:
    """Base client for the Linear GraphQL API."""

    config: LinearConfig
    session: Session

    def __init__(self, config: LinearConfig | None = None) -> None:
        """Initialize the Linear client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If configuration is invalid or the API key is missing
        """
        self.config = config or LinearConfig.from_env()

        self.session = Session()
        self.session.headers.update(
            {
                "Authorization": self.config.api_key,
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )
        logger.debug(
            f"Initialized Linear client. URL: {self.config.url}, "
            f"API key (masked): {mask_sensitive(self.config.api_key)}"
        )

    @handle_auth_errors("Linear API")
    def execute(
        self, query: str, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL query or mutation and return its ``data`` object.

        Args:
            query: GraphQL document
            variables: Optional variables for the document

        Returns:
            The ``data`` member of the GraphQL response

        Raises:
            MCPLinearAuthenticationError: If Linear rejects the API key
            MCPLinearAPIError: If the response carries GraphQL errors
            requests.HTTPError: For other non-2xx responses
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        response = self.session.post(
            self.config.url, json=payload, timeout=self.config.timeout
        )
        if response.status_code in (401, 403):
            response.raise_for_status()

        try:
            body = response.json()
        except ValueError:
            response.raise_for_status()
            raise MCPLinearAPIError(
                "Linear API returned a non-JSON response", response.status_code
            ) from None

        if errors := body.get("errors"):
            message = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            logger.debug(f"Linear GraphQL errors: {message}")
            raise MCPLinearAPIError(message, response.status_code)

        response.raise_for_status()
        return body.get("data") or {}

    def fetch_bytes(self, url: str) -> bytes | None:
        """Download a file (e.g. an uploaded image) with the Linear credentials.

        Returns:
            The raw content, or None when the download fails
        """
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except RequestException as e:
            logger.warning(f"Failed to download {url}: {e}")
            return None
        return response.content
