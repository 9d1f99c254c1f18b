"""Drupal MCP Server - stdio entry point.

Builds the Drupal client, the tool registry and router, and serves them
to an MCP host over stdio.
"""

import asyncio
import sys

from drupal_client import DrupalClient
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging
from drupal_mcp.router import ToolRouter
from drupal_mcp.server import create_server, run_stdio
from drupal_mcp.tools import build_registry

logger = get_logger(__name__)


async def serve(settings: Settings) -> None:
    """Run the server until the MCP host closes the connection."""
    client = DrupalClient(settings.drupal.to_client_config())
    router = ToolRouter(build_registry(client))
    server = create_server(
        router,
        name=settings.server_name,
        version=settings.server_version
    )

    logger.info(
        "Drupal MCP Server running",
        base_url=client.config.base_url,
        tool_count=len(router.list_tools())
    )

    try:
        await run_stdio(server)
    finally:
        logger.info("Shutting down Drupal MCP Server")
        await client.close()


def main() -> None:
    """Run the Drupal MCP Server."""
    settings = get_settings()
    setup_logging(settings.log_level, json_output=settings.log_json)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error("Fatal error", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
