class MCPLinearError(Exception):
    """Base exception for MCP-Linear errors."""

    pass


class MCPLinearAuthenticationError(MCPLinearError):
    """Raised when Linear or GitHub API authentication fails (401/403)."""

    pass


class MCPLinearAPIError(MCPLinearError):
    """Raised when a remote API rejects a request.

    The message carries the remote error text verbatim.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MCPLinearNotFoundError(MCPLinearError, ValueError):
    """Raised when a remote lookup returns no entity."""

    pass


class MCPLinearWorkflowError(MCPLinearError):
    """Raised when a step of a multi-call workflow fails.

    Steps completed before the failure are not undone.
    """

    def __init__(self, step: str, completed: list[str], message: str) -> None:
        done = ", ".join(completed) if completed else "none"
        super().__init__(
            f"Step '{step}' failed: {message} (completed steps: {done})"
        )
        self.step = step
        self.completed = list(completed)
