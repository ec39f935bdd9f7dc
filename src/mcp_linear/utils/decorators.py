import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from fastmcp import Context
from fastmcp.exceptions import ToolError
from requests.exceptions import HTTPError

from mcp_linear.exceptions import MCPLinearAuthenticationError

logger = logging.getLogger("mcp-linear.utils.decorators")


F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def check_write_access(func: F) -> F:
    """
    Decorator for FastMCP tools to check if the application is in read-only mode.
    If in read-only mode, it raises a ToolError.
    Assumes the decorated function is async and has `ctx: Context` as its first argument.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx_dict = ctx.request_context.lifespan_context
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
            tool_name = func.__name__
            action_description = tool_name.replace("_", " ")
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            raise ToolError(f"Cannot {action_description} in read-only mode.")

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def handle_tool_errors(func: F) -> F:
    """
    Decorator for FastMCP tools that turns any failure into a ToolError.

    The ToolError message is the underlying error text, so the host sees the
    remote API's message verbatim in an ``isError`` result.
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except ToolError:
            raise
        except MCPLinearAuthenticationError as e:
            logger.error(f"{func.__name__} failed: {e}")
            raise ToolError(f"Authentication/Permission Error: {e}") from e
        except ValueError as e:
            logger.warning(f"{func.__name__} rejected: {e}")
            raise ToolError(str(e)) from e
        except Exception as e:
            logger.error(f"{func.__name__} failed: {e}", exc_info=True)
            raise ToolError(str(e) or type(e).__name__) from e

    return wrapper  # type: ignore


def handle_auth_errors(service_name: str = "Remote API") -> Callable:
    """
    Decorator mapping HTTP 401/403 responses to MCPLinearAuthenticationError.

    Every other exception propagates unchanged.

    Args:
        service_name: Name of the service for error messages (e.g., "Linear API").
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            try:
                return func(self, *args, **kwargs)
            except HTTPError as http_err:
                if http_err.response is not None and http_err.response.status_code in (
                    401,
                    403,
                ):
                    error_msg = (
                        f"Authentication failed for {service_name} "
                        f"({http_err.response.status_code}). "
                        "Token may be expired or invalid. Please verify credentials."
                    )
                    logger.error(error_msg)
                    raise MCPLinearAuthenticationError(error_msg) from http_err
                raise

        return wrapper

    return decorator
