import asyncio
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.3.0"

from .logging_config import log_operation, setup_logger
from .utils.env import is_env_truthy

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "http"]),
    default="stdio",
    help="Transport type (stdio or http)",
)
@click.option(
    "--host",
    default="127.0.0.1",
    help="Host to bind for HTTP transport",
)
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for HTTP transport",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=None,
    help="Enable/disable file logging (default: MCP_LINEAR_LOG_TO_FILE)",
)
@click.option("--linear-api-key", help="Linear personal API key")
@click.option("--github-token", help="GitHub personal access token")
@click.option(
    "--github/--no-github",
    "github_enabled",
    default=None,
    help="Enable/disable the GitHub tools (default: GITHUB_ENABLED)",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Reject every tool that changes Linear or GitHub (default: READ_ONLY_MODE)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool | None,
    linear_api_key: str | None,
    github_token: str | None,
    github_enabled: bool | None,
    read_only: bool | None,
) -> None:
    """MCP Linear Server - Linear issues and GitHub pull requests for MCP."""
    # Load environment variables from file if specified, otherwise try default .env
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    if log_to_file is None:
        log_to_file = is_env_truthy("MCP_LINEAR_LOG_TO_FILE")

    setup_logger(
        name="mcp-linear",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )

    # Set environment variables from command line arguments if provided
    if linear_api_key:
        os.environ["LINEAR_API_KEY"] = linear_api_key
    if github_token:
        os.environ["GITHUB_TOKEN"] = github_token

    from .servers import create_server_from_env, run_server

    with log_operation(logger, "application_startup", app_version=__version__):
        try:
            server = create_server_from_env(
                read_only=read_only, github_enabled=github_enabled
            )
        except ValueError as e:
            logger.error(f"Configuration error: {e}")
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)

    logger.info(f"Starting MCP Linear v{__version__} with {transport} transport")
    try:
        asyncio.run(run_server(server, transport=transport, host=host, port=port))
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
