"""MCP server implementations for Linear and GitHub."""

from .main import create_server, create_server_from_env, run_server

__all__ = ["create_server", "create_server_from_env", "run_server"]
