"""Shared fixtures: an in-memory Drupal JSON:API backend."""

from typing import Any, Optional

import httpx
import pytest

from shared.models import DrupalConfig


BASE_URL = "https://cms.example.com"


def make_node(
    node_id: str,
    title: str,
    bundle: str = "article",
    status: bool = True,
    **extra_attributes: Any
) -> dict[str, Any]:
    """Build a JSON:API node resource."""
    return {
        "type": f"node--{bundle}",
        "id": node_id,
        "attributes": {
            "title": title,
            "created": "2024-01-01T10:00:00+00:00",
            "changed": "2024-01-02T10:00:00+00:00",
            "status": status,
            **extra_attributes,
        },
    }


def make_content_type(machine_name: str, label: str) -> dict[str, Any]:
    """Build a node_type--node_type resource."""
    return {
        "type": "node_type--node_type",
        "id": f"uuid-{machine_name}",
        "attributes": {
            "drupal_internal__type": machine_name,
            "name": label,
            "description": f"{label} content",
            "langcode": "en",
        },
    }


class FakeDrupal:
    """
    Minimal JSON:API backend served through httpx.MockTransport.

    Honors page[limit], the title CONTAINS filter and the status filter,
    and records every request it receives.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.collections: dict[str, list[dict[str, Any]]] = {}
        self.content_types: list[dict[str, Any]] = []
        self.nodes: dict[str, dict[str, Any]] = {}
        self.failures: dict[str, int] = {}
        self.singletons: set[str] = set()
        self.raise_error: Optional[Exception] = None

    def add_collection(self, bundle: str, nodes: list[dict[str, Any]]) -> None:
        self.collections[bundle] = nodes
        for node in nodes:
            self.nodes[node["id"]] = node

    def fail(self, path: str, status_code: int) -> None:
        self.failures[path] = status_code

    @property
    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.raise_error is not None:
            raise self.raise_error

        path = request.url.path
        if path in self.failures:
            status_code = self.failures[path]
            return httpx.Response(
                status_code,
                json={"errors": [{"status": str(status_code), "title": "Failure"}]},
            )

        if path == "/jsonapi/node_type/node_type":
            return self._document(self.content_types, "node_type" in self.singletons)

        if path.startswith("/jsonapi/node/node/"):
            node = self.nodes.get(path.rsplit("/", 1)[-1])
            if node is None:
                return httpx.Response(404, json={"errors": [{"status": "404"}]})
            return httpx.Response(200, json={"data": node, "jsonapi": {"version": "1.0"}})

        if path.startswith("/jsonapi/node/"):
            bundle = path.rsplit("/", 1)[-1]
            if bundle not in self.collections:
                return httpx.Response(404, json={"errors": [{"status": "404"}]})
            return self._document(self._filter(bundle, request), bundle in self.singletons)

        return httpx.Response(404, json={"errors": [{"status": "404"}]})

    def _filter(self, bundle: str, request: httpx.Request) -> list[dict[str, Any]]:
        params = request.url.params
        items = list(self.collections[bundle])

        if params.get("filter[title][operator]") == "CONTAINS":
            needle = params.get("filter[title][value]", "").lower()
            items = [n for n in items if needle in n["attributes"]["title"].lower()]

        if "filter[status]" in params:
            wanted = params["filter[status]"] == "1"
            items = [n for n in items if n["attributes"]["status"] == wanted]

        return items[: int(params.get("page[limit]", 50))]

    @staticmethod
    def _document(items: list[dict[str, Any]], as_singleton: bool) -> httpx.Response:
        data: Any = items[0] if as_singleton and len(items) == 1 else items
        return httpx.Response(200, json={"data": data, "links": {"self": {"href": "x"}}})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_drupal() -> FakeDrupal:
    fake = FakeDrupal()
    fake.content_types = [
        make_content_type("article", "Article"),
        make_content_type("page", "Basic page"),
    ]
    fake.add_collection("article", [
        make_node(f"a{i}", f"Article {i}", body={"value": f"<p>{i}</p>", "format": "basic_html", "processed": f"<p>{i}</p>"})
        for i in range(1, 6)
    ])
    fake.add_collection("page", [
        make_node("p1", "About us", bundle="page"),
        make_node("p2", "Article archive", bundle="page"),
        make_node("p3", "Draft article page", bundle="page", status=False),
    ])
    return fake


@pytest.fixture
def drupal_config() -> DrupalConfig:
    return DrupalConfig(base_url=BASE_URL, access_token="test-token")


@pytest.fixture
def client(fake_drupal: FakeDrupal, drupal_config: DrupalConfig):
    from drupal_client import DrupalClient

    return DrupalClient(drupal_config, transport=fake_drupal.transport())
