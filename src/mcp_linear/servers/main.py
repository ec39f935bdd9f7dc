"""Main FastMCP server setup for the Linear/GitHub integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_linear.github import GitHubConfig, GitHubFetcher, is_github_enabled
from mcp_linear.linear import LinearConfig, LinearFetcher
from mcp_linear.utils.io import is_read_only_mode
from mcp_linear.utils.logging import log_config_param
from mcp_linear.utils.markdown import (
    EncodingImageAnalyzer,
    ImageAnalyzer,
    placeholder_analyzer,
)

from .context import MainAppContext
from .github import github_mcp
from .linear import linear_mcp
from .workflows import workflows_mcp

logger = logging.getLogger("mcp-linear.server.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def default_image_analyzer(linear: LinearFetcher) -> ImageAnalyzer:
    """Analyzer selected by ``LINEAR_IMAGE_ANALYSIS`` on the Linear config."""
    if linear.config.image_analysis == "encode":
        return EncodingImageAnalyzer(linear.fetch_bytes)
    return placeholder_analyzer


def create_server(
    linear: LinearFetcher,
    github: GitHubFetcher | None = None,
    read_only: bool = False,
    image_analyzer: ImageAnalyzer | None = None,
) -> FastMCP[MainAppContext]:
    """
    Build the MCP application around already constructed clients.

    GitHub tools and the feature PR workflow are only mounted when a GitHub
    client is given.

    Args:
        linear: Linear client
        github: GitHub client, or None to leave GitHub out
        read_only: Reject every write tool
        image_analyzer: Turns image URLs into analysis text

    Returns:
        The FastMCP application
    """
    app_context = MainAppContext(
        linear=linear,
        github=github,
        read_only=read_only,
        image_analyzer=image_analyzer or default_image_analyzer(linear),
    )

    @asynccontextmanager
    async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
        logger.info("Main Linear MCP server lifespan starting...")
        logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
        logger.info(f"GitHub integration: {'ENABLED' if github else 'DISABLED'}")
        try:
            yield {"app_lifespan_context": app_context}
        finally:
            logger.info("Main Linear MCP server lifespan shutdown complete.")

    main_mcp: FastMCP[MainAppContext] = FastMCP(
        name="Linear MCP", lifespan=main_lifespan
    )
    main_mcp.mount(linear_mcp)
    if github is not None:
        main_mcp.mount(github_mcp, prefix="github")
        main_mcp.mount(workflows_mcp)

    @main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
    async def _health_check_route(request: Request) -> JSONResponse:
        return await health_check(request)

    return main_mcp


def create_server_from_env(
    read_only: bool | None = None, github_enabled: bool | None = None
) -> FastMCP[MainAppContext]:
    """
    Build the clients from environment configuration and create the server.

    Args:
        read_only: Override READ_ONLY_MODE
        github_enabled: Override GITHUB_ENABLED

    Raises:
        ValueError: If a required credential is missing
    """
    linear_config = LinearConfig.from_env()
    log_config_param(logger, "Linear", "URL", linear_config.url)
    log_config_param(logger, "Linear", "API key", linear_config.api_key, sensitive=True)
    log_config_param(logger, "Linear", "image analysis", linear_config.image_analysis)
    linear = LinearFetcher(config=linear_config)

    github: GitHubFetcher | None = None
    if is_github_enabled() if github_enabled is None else github_enabled:
        github_config = GitHubConfig.from_env()
        log_config_param(logger, "GitHub", "URL", github_config.url)
        log_config_param(logger, "GitHub", "token", github_config.token, sensitive=True)
        log_config_param(
            logger, "GitHub", "default base branch", github_config.default_base_branch
        )
        github = GitHubFetcher(config=github_config)

    return create_server(
        linear,
        github=github,
        read_only=is_read_only_mode() if read_only is None else read_only,
    )


async def run_server(
    server: FastMCP,
    transport: Literal["stdio", "http"] = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Serve over stdio, or streamable HTTP on ``host:port``."""
    if transport == "http":
        logger.info(f"Serving streamable HTTP on {host}:{port}")
        await server.run_async(transport="streamable-http", host=host, port=port)
    else:
        await server.run_async(transport="stdio")
