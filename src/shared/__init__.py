"""Shared models, configuration and logging for the Drupal MCP Server."""

from shared.models import (
    ContentType,
    DrupalConfig,
    Node,
    ToolDefinition,
    ToolResult,
    ToolResultStatus,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "ContentType",
    "DrupalConfig",
    "Node",
    "ToolDefinition",
    "ToolResult",
    "ToolResultStatus",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]
