"""I/O utility functions for MCP Linear."""

from .env import is_env_extended_truthy


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode rejects every tool that creates or changes Linear issues,
    GitHub branches or pull requests, while read tools keep working.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_extended_truthy("READ_ONLY_MODE", "false")
