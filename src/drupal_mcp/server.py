"""MCP protocol binding.

Exposes the tool router through a low-level MCP server over stdio.
The router owns all tool semantics; this module only converts between
its models and MCP protocol types.
"""

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from shared.logging import get_logger
from shared.models import ToolDefinition, ToolResult
from drupal_mcp.router import ToolRouter

logger = get_logger(__name__)


def to_mcp_tool(tool: ToolDefinition) -> types.Tool:
    """Convert a tool definition to its MCP representation."""
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=tool.input_schema,
    )


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    """Convert a router result to a single-text-block MCP result."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.to_text())],
        isError=result.is_error,
    )


def create_server(
    router: ToolRouter,
    name: str = "drupal-mcp-server",
    version: str = "1.0.0"
) -> Server:
    """
    Create the MCP server and wire its handlers to the router.

    Input validation is left to the router so that schema violations are
    reported the same way as every other tool failure.
    """
    server = Server(name, version=version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [to_mcp_tool(tool) for tool in router.list_tools()]

    @server.call_tool(validate_input=False)
    async def call_tool(tool_name: str, arguments: dict) -> types.CallToolResult:
        result = await router.execute(tool_name, arguments)
        return to_call_tool_result(result)

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP requests over stdin/stdout until the stream closes."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )
