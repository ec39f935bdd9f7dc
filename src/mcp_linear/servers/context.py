from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_linear.github import GitHubFetcher
    from mcp_linear.linear import LinearFetcher
    from mcp_linear.utils.markdown import ImageAnalyzer


@dataclass(frozen=True)
class MainAppContext:
    """Clients and settings shared by every tool call, built once at startup."""

    linear: LinearFetcher | None = None
    github: GitHubFetcher | None = None
    read_only: bool = False
    image_analyzer: ImageAnalyzer | None = None
