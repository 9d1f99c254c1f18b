"""Drupal JSON:API client.

Translates the logical content operations (query, get, list types,
search) into JSON:API requests and normalizes responses and errors.
"""

import base64
import math
from typing import Any, Optional

import httpx
from pydantic import BaseModel, Field

from shared.logging import get_logger
from shared.models import (
    AuthScheme,
    ContentType,
    ContentTypeResource,
    DrupalConfig,
    JsonApiDocument,
    Node,
)

logger = get_logger(__name__)

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"
DEFAULT_LIMIT = 10

# Failures that turn into a client error for the operation in flight
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


class DrupalClientError(Exception):
    """Base exception for Drupal client errors."""
    pass


class QueryFailure(DrupalClientError):
    """Querying a content collection failed."""
    pass


class NodeNotFound(DrupalClientError):
    """The requested node does not exist."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id} not found")


class GetFailure(DrupalClientError):
    """Fetching a single node failed for a reason other than 404."""
    pass


class ListFailure(DrupalClientError):
    """Listing content types failed."""
    pass


class SearchFailure(DrupalClientError):
    """Cross-type search could not run."""
    pass


class TypeSearchOutcome(BaseModel):
    """Result of searching one content type during a cross-type search."""
    content_type: str
    nodes: list[Node] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_headers(config: DrupalConfig) -> dict[str, str]:
    """Build default request headers, including the Authorization header."""
    headers = {
        "Accept": JSONAPI_MEDIA_TYPE,
        "Content-Type": JSONAPI_MEDIA_TYPE,
    }

    scheme = config.auth_scheme
    if scheme is AuthScheme.BASIC:
        credentials = f"{config.username}:{config.password}".encode("utf-8")
        headers["Authorization"] = f"Basic {base64.b64encode(credentials).decode('ascii')}"
    elif scheme is AuthScheme.BEARER:
        headers["Authorization"] = f"Bearer {config.access_token}"

    return headers


class DrupalClient:
    """
    Client for the Drupal JSON:API.

    Provides methods for:
    - Querying content of one type with optional filters
    - Fetching a single node with related entities
    - Listing content types
    - Searching titles across all content types

    Credentials are fixed at construction; the underlying HTTP client is
    created once and reused for the lifetime of the instance.
    """

    def __init__(
        self,
        config: DrupalConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> None:
        """
        Initialize the Drupal client.

        Args:
            config: Connection settings
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._headers = build_headers(config)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            "Drupal client configured",
            base_url=config.base_url,
            auth=config.auth_scheme.value
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.api_url,
                timeout=self.config.timeout,
                headers=self._headers,
                transport=self._transport
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DrupalClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None
    ) -> JsonApiDocument:
        """Issue a GET against the JSON:API root and parse the document."""
        client = await self._get_client()
        logger.debug("Drupal request", path=path, params=params or {})

        response = await client.get(path, params=params)
        response.raise_for_status()
        return JsonApiDocument.model_validate(response.json())

    async def query_content(
        self,
        content_type: str,
        limit: Optional[float] = DEFAULT_LIMIT,
        title: Optional[str] = None,
        status: Optional[bool] = None
    ) -> list[Node]:
        """
        Query content by type with optional filters.

        Args:
            content_type: Machine name of the content type (e.g. "article")
            limit: Page size; a missing or zero limit falls back to 10
            title: Case-insensitive partial match on the title
            status: True for published, False for unpublished

        Returns:
            List of nodes, even when the backend returns a single resource

        Raises:
            QueryFailure: On any transport, HTTP or decoding error
        """
        # JSON numbers may arrive as floats; Drupal expects an integer page size
        params: dict[str, Any] = {"page[limit]": int(limit) if limit else DEFAULT_LIMIT}

        if title:
            params["filter[title][operator]"] = "CONTAINS"
            params["filter[title][value]"] = title
        if status is not None:
            params["filter[status]"] = "1" if status else "0"

        try:
            document = await self._get(f"/node/{content_type}", params=params)
            return [Node.model_validate(resource) for resource in document.resources()]
        except _REQUEST_ERRORS as e:
            raise QueryFailure(f"Failed to query content: {e}") from e

    async def get_node(
        self,
        node_id: str,
        include: Optional[list[str]] = None
    ) -> Node:
        """
        Get a single node by ID with optional related entities.

        Args:
            node_id: UUID of the node
            include: Relationship names to expand (e.g. ["field_image", "uid"])

        Raises:
            NodeNotFound: If the backend answers 404
            GetFailure: On any other failure
        """
        params: dict[str, Any] = {}
        if include:
            params["include"] = ",".join(include)

        try:
            document = await self._get(f"/node/node/{node_id}", params=params)
            return Node.model_validate(document.data)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NodeNotFound(node_id) from e
            raise GetFailure(f"Failed to get node: {e}") from e
        except _REQUEST_ERRORS as e:
            raise GetFailure(f"Failed to get node: {e}") from e

    async def list_content_types(self) -> list[ContentType]:
        """
        List all available content types.

        Raises:
            ListFailure: If the listing cannot be fetched or parsed
        """
        try:
            document = await self._get("/node_type/node_type")
            return [
                ContentTypeResource.model_validate(resource).to_content_type()
                for resource in document.resources()
            ]
        except _REQUEST_ERRORS as e:
            raise ListFailure(f"Failed to list content types: {e}") from e

    async def _search_type(
        self,
        content_type: str,
        search_term: str,
        per_type_limit: int
    ) -> TypeSearchOutcome:
        try:
            nodes = await self.query_content(
                content_type,
                limit=per_type_limit,
                title=search_term,
                status=True
            )
        except QueryFailure as e:
            return TypeSearchOutcome(content_type=content_type, error=str(e))
        return TypeSearchOutcome(content_type=content_type, nodes=nodes)

    async def search_content(
        self,
        search_term: str,
        limit: float = DEFAULT_LIMIT
    ) -> list[Node]:
        """
        Search published content titles across all content types.

        Types are queried one after another in listing order. A type
        whose query fails (typically for lack of read permission) is
        skipped. The concatenated results are truncated to ``limit``.

        Raises:
            SearchFailure: If the content types cannot be listed
        """
        try:
            content_types = await self.list_content_types()
        except ListFailure as e:
            raise SearchFailure(f"Failed to search content: {e}") from e

        if not content_types:
            return []

        # Fractional limits truncate, as slicing the combined list would
        limit = int(limit)
        per_type_limit = math.ceil(limit / len(content_types))

        outcomes: list[TypeSearchOutcome] = []
        for content_type in content_types:
            outcomes.append(
                await self._search_type(content_type.id, search_term, per_type_limit)
            )

        results: list[Node] = []
        for outcome in outcomes:
            if not outcome.ok:
                logger.debug(
                    "Skipping content type in search",
                    content_type=outcome.content_type,
                    reason=outcome.error
                )
                continue
            results.extend(outcome.nodes)

        return results[:limit]
