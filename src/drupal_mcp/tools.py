"""Drupal content tools.

Defines the tool catalog exposed over MCP and the handlers that call the
Drupal client and reduce its results to what the assistant needs.
"""

from typing import Any

from drupal_client import DrupalClient
from shared.logging import get_logger
from shared.models import Node, ToolDefinition
from drupal_mcp.registry import ToolRegistry

logger = get_logger(__name__)


CONTENT_TYPE_DESCRIPTION = (
    'The machine name of the content type (e.g., "article", "page", "blog_post")'
)


def summarize_node(node: Node, include_timestamps: bool = True) -> dict[str, Any]:
    """Project a node to the short record returned by list-style tools."""
    attributes = node.attributes
    summary: dict[str, Any] = {
        "id": node.id,
        "title": attributes.title,
        "type": node.type,
        "status": "published" if attributes.status else "unpublished",
    }
    if include_timestamps:
        if attributes.created is not None:
            summary["created"] = attributes.created
        if attributes.changed is not None:
            summary["changed"] = attributes.changed
    return summary


class DrupalTools:
    """
    Drupal content tools.

    Provides tools for:
    - Querying content of one type
    - Retrieving a node with related entities
    - Listing content types
    - Searching titles across all types
    """

    def __init__(self, client: DrupalClient) -> None:
        self.client = client
        self._tools: dict[str, ToolDefinition] = {}
        self._define_tools()

    def _define_tools(self) -> None:
        """Define all Drupal tools."""

        self._tools["query_content"] = ToolDefinition(
            name="query_content",
            description="Search and filter Drupal content by type. Returns a list of nodes matching the criteria.",
            input_schema={
                "type": "object",
                "properties": {
                    "contentType": {
                        "type": "string",
                        "description": CONTENT_TYPE_DESCRIPTION
                    },
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of results to return (default: 10)",
                        "default": 10
                    },
                    "title": {
                        "type": "string",
                        "description": "Filter by title (partial match)"
                    },
                    "status": {
                        "type": "boolean",
                        "description": "Filter by publication status (true = published, false = unpublished)"
                    }
                },
                "required": ["contentType"]
            }
        )

        # nodeType is required by the schema but the lookup is by id only
        self._tools["get_node"] = ToolDefinition(
            name="get_node",
            description="Retrieve complete details of a specific Drupal node by its ID",
            input_schema={
                "type": "object",
                "properties": {
                    "nodeType": {
                        "type": "string",
                        "description": CONTENT_TYPE_DESCRIPTION
                    },
                    "nodeId": {
                        "type": "string",
                        "description": "The UUID or numeric ID of the node"
                    },
                    "include": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": 'Related entities to include (e.g., ["field_image", "uid"] to include image and author)'
                    }
                },
                "required": ["nodeType", "nodeId"]
            }
        )

        self._tools["list_content_types"] = ToolDefinition(
            name="list_content_types",
            description="List all available content types on the Drupal site",
            input_schema={
                "type": "object",
                "properties": {}
            }
        )

        self._tools["search_content"] = ToolDefinition(
            name="search_content",
            description="Search across all content types by title. Useful when you don't know the specific content type.",
            input_schema={
                "type": "object",
                "properties": {
                    "searchTerm": {
                        "type": "string",
                        "description": "The text to search for in content titles"
                    },
                    "limit": {
                        "type": "number",
                        "description": "Maximum number of results (default: 10)",
                        "default": 10
                    }
                },
                "required": ["searchTerm"]
            }
        )

    @property
    def tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    @property
    def handlers(self) -> dict[str, Any]:
        return {
            "query_content": self._query_content,
            "get_node": self._get_node,
            "list_content_types": self._list_content_types,
            "search_content": self._search_content,
        }

    async def _query_content(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        nodes = await self.client.query_content(
            params["contentType"],
            limit=params.get("limit"),
            title=params.get("title"),
            status=params.get("status"),
        )
        return [summarize_node(node) for node in nodes]

    async def _get_node(self, params: dict[str, Any]) -> dict[str, Any]:
        node = await self.client.get_node(
            params["nodeId"],
            include=params.get("include") or []
        )
        return node.to_raw()

    async def _list_content_types(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        content_types = await self.client.list_content_types()
        return [content_type.model_dump() for content_type in content_types]

    async def _search_content(self, params: dict[str, Any]) -> list[dict[str, Any]]:
        results = await self.client.search_content(
            params["searchTerm"],
            limit=params.get("limit", 10)
        )
        return [summarize_node(node, include_timestamps=False) for node in results]


def register_drupal_tools(registry: ToolRegistry, client: DrupalClient) -> DrupalTools:
    """Register the Drupal tools and their handlers."""
    drupal_tools = DrupalTools(client)
    handlers = drupal_tools.handlers

    for tool in drupal_tools.tools:
        registry.register(tool, handlers[tool.name])

    logger.info("Drupal tools registered", tool_count=len(drupal_tools.tools))
    return drupal_tools


def build_registry(client: DrupalClient) -> ToolRegistry:
    """Build the process-wide tool registry."""
    registry = ToolRegistry()
    register_drupal_tools(registry, client)
    return registry
