"""Tool Registry for the Drupal MCP Server.

Holds the tool catalog: each tool name maps to its definition and the
handler that executes it. The registry is built once at startup and
handed to the router explicitly.
"""

from typing import Any, Awaitable, Callable, Optional

from shared.logging import get_logger
from shared.models import ToolDefinition
from shared.schema import validate_schema

logger = get_logger(__name__)


# A handler receives the validated arguments and returns JSON-ready data
ToolHandler = Callable[[dict[str, Any]], Awaitable[Any]]


class ToolRegistry:
    """
    Registry of MCP tools.

    Responsibilities:
    - Register tools together with their handlers
    - Lookup tools by name
    - List the catalog in registration order
    - Validate tool arguments against input schemas
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._handlers: dict[str, ToolHandler] = {}

    def register(self, tool: ToolDefinition, handler: ToolHandler) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool definition to register
            handler: Coroutine function executing the tool

        Raises:
            ValueError: If tool name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool
        self._handlers[tool.name] = handler

        logger.debug("Tool registered", tool=tool.name)

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        """
        Get a tool by its exact name.

        Returns:
            ToolDefinition if found, None otherwise
        """
        return self._tools.get(tool_name)

    def get_handler(self, tool_name: str) -> Optional[ToolHandler]:
        return self._handlers.get(tool_name)

    def list_tools(self) -> list[ToolDefinition]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def validate_input(
        self,
        tool_name: str,
        parameters: dict[str, Any]
    ) -> tuple[bool, list[str]]:
        """
        Validate input parameters against tool's input schema.

        Args:
            tool_name: Tool name
            parameters: Input parameters to validate

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        tool = self.get(tool_name)
        if not tool:
            return False, [f"Tool '{tool_name}' not found"]

        return validate_schema(parameters, tool.input_schema)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
