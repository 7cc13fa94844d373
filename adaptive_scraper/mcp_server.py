"""MCP stdio server exposing the scraping tools.

Run with ``adaptive-scraper-mcp`` (or ``python -m adaptive_scraper.mcp_server``).
Logs go to stderr; stdout carries the protocol.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from adaptive_scraper import __version__
from adaptive_scraper.core.config import settings
from adaptive_scraper.core.container import ServiceContainer
from adaptive_scraper.services.tool_service import ToolService

logger = logging.getLogger(__name__)


def create_mcp_server(tools: ToolService) -> Server:
    """Create an MCP server backed by ``tools``.

    Returns:
        Configured MCP Server instance
    """
    server = Server("adaptive-scraper", version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available scraping tools"""
        return [
            Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in tools.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Execute a tool; failures come back as an ``Error: ...`` text block."""
        response = await tools.handle_request(name, arguments)
        return [TextContent(type="text", text=block.text) for block in response.content]

    return server


async def main() -> None:
    """Run the MCP server over stdio until the client disconnects."""
    container = ServiceContainer.build(settings)
    server = create_mcp_server(container.tools)
    logger.info("Starting adaptive-scraper MCP server (stdio)")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream, write_stream, server.create_initialization_options()
            )
    finally:
        await container.aclose()
        logger.info("MCP server stopped")


def run() -> None:
    """Console-script entry point."""
    logging.basicConfig(
        level=settings.get_log_level_int(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
