"""Base client module for GitHub API interactions."""

import logging
from typing import Any

from requests import Response, Session

from ..exceptions import MCPLinearAPIError
from ..utils.decorators import handle_auth_errors
from ..utils.logging import mask_sensitive
from .config import GitHubConfig

logger = logging.getLogger("mcp-linear.github")


class GitHubClient:
    """Base client for GitHub REST API interactions."""

    config: GitHubConfig
    session: Session

    def __init__(self, config: GitHubConfig | None = None) -> None:
        """Initialize the GitHub client with configuration options.

        Args:
            config: Optional configuration object (will use env vars if not provided)

        Raises:
            ValueError: If configuration is invalid or the token is missing
        """
        self.config = config or GitHubConfig.from_env()

        self.session = Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {self.config.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        logger.debug(
            f"Initialized GitHub client. URL: {self.config.url}, "
            f"Token (masked): {mask_sensitive(self.config.token)}"
        )

    @staticmethod
    def _error_message(response: Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason or "Unknown error"
        message = body.get("message", "") if isinstance(body, dict) else ""
        details = [
            error.get("message") or error.get("code")
            for error in (body.get("errors") or [] if isinstance(body, dict) else [])
            if isinstance(error, dict)
        ]
        if details:
            message = f"{message}: {'; '.join(str(d) for d in details if d)}"
        return message or response.reason or "Unknown error"

    @handle_auth_errors("GitHub API")
    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request to the GitHub API.

        Args:
            method: HTTP method
            endpoint: API endpoint (relative to base URL)
            params: Optional query parameters
            json_data: Optional JSON body

        Returns:
            Response data (usually dict or list)

        Raises:
            MCPLinearAuthenticationError: If GitHub rejects the token (401)
            MCPLinearAPIError: For any other non-2xx response, 403 included,
                with GitHub's message
        """
        url = f"{self.config.url}{endpoint}"
        response = self.session.request(
            method, url, params=params, json=json_data, timeout=self.config.timeout
        )
        if response.status_code == 401:
            response.raise_for_status()
        if not response.ok:
            message = self._error_message(response)
            raise MCPLinearAPIError(
                f"GitHub API error ({response.status_code}): {message}",
                response.status_code,
            )
        if not response.content:
            return None
        return response.json()

    def _get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def _post(self, endpoint: str, json_data: dict[str, Any] | None = None) -> Any:
        return self._request("POST", endpoint, json_data=json_data)

    def _patch(self, endpoint: str, json_data: dict[str, Any] | None = None) -> Any:
        return self._request("PATCH", endpoint, json_data=json_data)
