"""Dependency providers for LinearFetcher and GitHubFetcher.

Provides get_linear_fetcher and get_github_fetcher for use in tool functions.
The fetchers are injected at startup through the lifespan context, never
looked up from module state.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_linear.github import GitHubFetcher
from mcp_linear.linear import LinearFetcher
from mcp_linear.servers.context import MainAppContext
from mcp_linear.utils.markdown import ImageAnalyzer, placeholder_analyzer

logger = logging.getLogger("mcp-linear.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


async def get_linear_fetcher(ctx: Context) -> LinearFetcher:
    """Returns the LinearFetcher injected into the application context."""
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.linear is None:
        logger.error("Linear client could not be resolved from lifespan context.")
        raise ValueError(
            "Linear client (fetcher) not available. Ensure server is configured correctly."
        )
    return app_ctx.linear


async def get_github_fetcher(ctx: Context) -> GitHubFetcher:
    """Returns the GitHubFetcher injected into the application context."""
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.github is None:
        raise ValueError(
            "GitHub client (fetcher) not available. Set GITHUB_TOKEN and "
            "GITHUB_ENABLED=true to use GitHub tools."
        )
    return app_ctx.github


def get_image_analyzer(ctx: Context) -> ImageAnalyzer:
    app_ctx = get_app_context(ctx)
    if app_ctx is None or app_ctx.image_analyzer is None:
        return placeholder_analyzer
    return app_ctx.image_analyzer
