"""Drupal MCP Server - tool catalog, routing and MCP binding.

Advertises a fixed catalog of Drupal content tools, dispatches calls to
the Drupal client, and converts every failure into an error result.
"""

from drupal_mcp.registry import ToolRegistry
from drupal_mcp.router import InvalidArguments, ToolRouter, UnknownTool
from drupal_mcp.tools import DrupalTools, build_registry, register_drupal_tools

__all__ = [
    "ToolRegistry",
    "ToolRouter",
    "InvalidArguments",
    "UnknownTool",
    "DrupalTools",
    "build_registry",
    "register_drupal_tools",
]
