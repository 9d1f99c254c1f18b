"""Tool Router for the Drupal MCP Server.

Dispatches tool calls to their handlers. This is the single boundary
where failures are converted into error results: nothing raised by a
handler or the Drupal client escapes to the transport.
"""

import time
from typing import Any, Optional

from drupal_client import DrupalClientError, NodeNotFound
from shared.logging import bind_context, get_logger, unbind_context
from shared.models import ToolDefinition, ToolResult, ToolResultStatus
from drupal_mcp.registry import ToolRegistry

logger = get_logger(__name__)


class UnknownTool(Exception):
    """No tool is registered under the requested name."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class InvalidArguments(Exception):
    """Tool arguments do not satisfy the declared input schema."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Validation failed: {'; '.join(errors)}")


class ToolRouter:
    """
    Routes tool calls to registered handlers.

    Responsibilities:
    - Advertise the tool catalog
    - Validate tool calls against schemas
    - Execute the matching handler
    - Convert every failure into an error result
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    def list_tools(self) -> list[ToolDefinition]:
        """Return the full tool catalog."""
        return self.registry.list_tools()

    async def execute(
        self,
        tool_name: str,
        arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """
        Execute a tool call.

        Args:
            tool_name: Exact tool name
            arguments: Tool arguments as received from the caller

        Returns:
            Tool execution result; never raises
        """
        # Client log lines emitted during this call carry the tool name
        bind_context(tool=tool_name)
        try:
            return await self._execute(tool_name, arguments or {})
        finally:
            unbind_context("tool")

    async def _execute(self, tool_name: str, arguments: dict[str, Any]) -> ToolResult:
        start_time = time.time()

        logger.debug("Executing tool")

        try:
            data = await self._dispatch(tool_name, arguments)
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.SUCCESS,
                data=data
            )
        except UnknownTool as e:
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.NOT_FOUND,
                error=str(e),
                error_code="TOOL_NOT_FOUND"
            )
        except InvalidArguments as e:
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.VALIDATION_ERROR,
                error=str(e),
                error_code="VALIDATION_ERROR"
            )
        except NodeNotFound as e:
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=str(e),
                error_code="NOT_FOUND"
            )
        except DrupalClientError as e:
            logger.warning("Drupal request failed", error=str(e))
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=str(e),
                error_code="EXECUTION_ERROR"
            )
        except Exception as e:
            logger.error(
                "Tool execution failed",
                error=str(e),
                exc_info=True
            )
            result = ToolResult(
                tool_name=tool_name,
                status=ToolResultStatus.ERROR,
                error=str(e),
                error_code="EXECUTION_ERROR"
            )

        result.execution_time_ms = (time.time() - start_time) * 1000

        logger.info(
            "Tool executed",
            status=result.status.value,
            execution_time_ms=round(result.execution_time_ms, 2)
        )
        return result

    async def _dispatch(self, tool_name: str, arguments: dict[str, Any]) -> Any:
        handler = self.registry.get_handler(tool_name)
        if handler is None:
            raise UnknownTool(tool_name)

        is_valid, errors = self.registry.validate_input(tool_name, arguments)
        if not is_valid:
            raise InvalidArguments(errors)

        return await handler(arguments)
