"""Core data models for the Drupal MCP Server.

This module defines the records exchanged with the Drupal JSON:API
backend and the tool definitions/results passed between the router
and the MCP transport.
"""

import json
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# JSON:API resources

class NodeBody(BaseModel):
    """Formatted body field of a node."""
    value: Optional[str] = None
    format: Optional[str] = None
    processed: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class NodeAttributes(BaseModel):
    """
    Attributes of a Drupal node.

    Only the fields needed for projections are declared; every other
    CMS-defined field is kept as an extra attribute and passed through.
    """
    title: Optional[str] = None
    created: Optional[str] = None
    changed: Optional[str] = None
    status: Optional[bool] = None
    body: Optional[NodeBody] = None

    model_config = ConfigDict(extra="allow")


class Node(BaseModel):
    """A content record as returned by JSON:API. Identity is (type, id)."""
    type: str
    id: str
    attributes: NodeAttributes = Field(default_factory=NodeAttributes)
    relationships: Optional[dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")

    def to_raw(self) -> dict[str, Any]:
        """Dump the node as received, without defaults for absent fields."""
        return self.model_dump(mode="json", exclude_unset=True)


class ContentType(BaseModel):
    """Content type descriptor: machine name and display label."""
    id: str
    label: str


class ContentTypeAttributes(BaseModel):
    drupal_internal__type: str
    name: str

    model_config = ConfigDict(extra="allow")


class ContentTypeResource(BaseModel):
    """A node_type--node_type resource as listed by JSON:API."""
    type: Optional[str] = None
    id: Optional[str] = None
    attributes: ContentTypeAttributes

    model_config = ConfigDict(extra="allow")

    def to_content_type(self) -> ContentType:
        return ContentType(
            id=self.attributes.drupal_internal__type,
            label=self.attributes.name,
        )


class JsonApiDocument(BaseModel):
    """Top-level JSON:API response document."""
    data: Union[list[dict[str, Any]], dict[str, Any], None] = None
    links: Optional[dict[str, Any]] = None
    included: Optional[list[Any]] = None
    meta: Optional[Any] = None

    model_config = ConfigDict(extra="allow")

    def resources(self) -> list[dict[str, Any]]:
        """Return primary data as a list, wrapping a single resource."""
        if isinstance(self.data, list):
            return self.data
        return [self.data]


# Client configuration

class AuthScheme(str, Enum):
    """Authorization scheme selected for outgoing requests."""
    BASIC = "basic"
    BEARER = "bearer"
    NONE = "none"


class DrupalConfig(BaseModel):
    """
    Connection settings for the Drupal JSON:API client.

    Immutable after construction. Basic auth wins over a bearer token
    when both are supplied.
    """
    base_url: str
    username: Optional[str] = None
    password: Optional[str] = None
    access_token: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/jsonapi"

    @property
    def auth_scheme(self) -> AuthScheme:
        if self.username and self.password:
            return AuthScheme.BASIC
        if self.access_token:
            return AuthScheme.BEARER
        return AuthScheme.NONE


# Tool definitions and results

class ToolDefinition(BaseModel):
    """
    Complete definition of an MCP tool.

    Tools are declarative and discoverable; the input schema is a JSON
    Schema object advertised verbatim to the caller.
    """
    name: str = Field(..., description="Tool name as exposed over MCP")
    description: str = Field(..., description="Clear description for LLM usage")
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        description="JSON Schema for input validation"
    )


class ToolResultStatus(str, Enum):
    """Status of tool execution."""
    SUCCESS = "success"
    ERROR = "error"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"


class ToolResult(BaseModel):
    """
    Result of a tool execution.

    Contains the projected output data, status, and any error information.
    """
    tool_name: str
    status: ToolResultStatus
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    execution_time_ms: float = 0

    @property
    def is_error(self) -> bool:
        return self.status != ToolResultStatus.SUCCESS

    def to_text(self) -> str:
        """Render the result as the text payload sent back to the caller."""
        if self.is_error:
            return f"Error: {self.error}"
        return json.dumps(self.data, indent=2, ensure_ascii=False)
