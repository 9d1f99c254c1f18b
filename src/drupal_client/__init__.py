"""Drupal JSON:API client.

Wraps a base URL and credentials into a configured HTTP client and
exposes content query, lookup, type listing and search operations.
"""

from drupal_client.client import (
    DrupalClient,
    DrupalClientError,
    GetFailure,
    ListFailure,
    NodeNotFound,
    QueryFailure,
    SearchFailure,
    TypeSearchOutcome,
)

__all__ = [
    "DrupalClient",
    "DrupalClientError",
    "GetFailure",
    "ListFailure",
    "NodeNotFound",
    "QueryFailure",
    "SearchFailure",
    "TypeSearchOutcome",
]
