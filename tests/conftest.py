"""Shared fixtures for catalog tests.

Provides an in-memory stand-in for the Cosmos DB product container. It keeps
documents in insertion order, enforces the unique slug key and raises the
same azure.cosmos exceptions as the real container. Queries are evaluated
from their named parameters, which is enough for the queries the catalog
issues.
"""

import copy
import time
import uuid
from typing import Any, Optional

import pytest
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)
from fastapi.testclient import TestClient

from catalog.api import get_product_service
from catalog.main import create_app
from catalog.models import ProductInput
from catalog.services import ProductService


class InMemoryCosmosClient:
    """Dict-backed replacement for CosmosDBClient."""

    def __init__(self):
        self.items: dict[str, dict[str, Any]] = {}
        self.queries: list[tuple[str, list[dict[str, Any]]]] = []
        self.point_reads: list[str] = []
        self.fail_queries = False

    def _slug_taken(self, slug: str, exclude_id: Optional[str] = None) -> bool:
        return any(
            doc.get("slug") == slug and doc_id != exclude_id for doc_id, doc in self.items.items()
        )

    def _stamp(self, item: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(item)
        stored["_ts"] = int(time.time())
        stored["_etag"] = uuid.uuid4().hex
        return stored

    async def create_item(self, item: dict[str, Any]) -> dict[str, Any]:
        if item["id"] in self.items or self._slug_taken(item.get("slug")):
            raise CosmosResourceExistsError(status_code=409, message="Conflict")
        self.items[item["id"]] = self._stamp(item)
        return copy.deepcopy(self.items[item["id"]])

    async def replace_item(self, item_id: str, item: dict[str, Any]) -> dict[str, Any]:
        if item_id not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Not found")
        if self._slug_taken(item.get("slug"), exclude_id=item_id):
            raise CosmosResourceExistsError(status_code=409, message="Conflict")
        self.items[item_id] = self._stamp(item)
        return copy.deepcopy(self.items[item_id])

    async def read_item(self, item_id: str, partition_key: str) -> dict[str, Any]:
        self.point_reads.append(item_id)
        document = self.items.get(item_id)
        if document is None or document.get("type") != partition_key:
            raise CosmosResourceNotFoundError(status_code=404, message="Not found")
        return copy.deepcopy(document)

    async def delete_item(self, item_id: str, partition_key: str) -> None:
        document = self.items.get(item_id)
        if document is None or document.get("type") != partition_key:
            raise CosmosResourceNotFoundError(status_code=404, message="Not found")
        del self.items[item_id]

    async def query_items(
        self,
        query: str,
        parameters: Optional[list[dict[str, Any]]] = None,
        partition_key: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        if self.fail_queries:
            raise CosmosHttpResponseError(status_code=503, message="Service unavailable")

        self.queries.append((query, parameters or []))
        params = {p["name"]: p["value"] for p in parameters or []}
        docs = list(self.items.values())

        if partition_key is not None:
            docs = [d for d in docs if d.get("type") == partition_key]
        if "@type" in params:
            docs = [d for d in docs if d.get("type") == params["@type"]]
        if "@slug" in params:
            docs = [d for d in docs if d.get("slug") == params["@slug"]]
        if "@categories" in params:
            docs = [d for d in docs if d.get("category") in params["@categories"]]
        if "@search" in params:
            needle = params["@search"].lower()
            docs = [d for d in docs if needle in d.get("title", "").lower()]
        if "@min_price" in params:
            docs = [d for d in docs if d["price"] >= params["@min_price"]]
        if "@max_price" in params:
            docs = [d for d in docs if d["price"] <= params["@max_price"]]

        if "ORDER BY c.price ASC" in query:
            docs = sorted(docs, key=lambda d: d["price"])
        elif "ORDER BY c.price DESC" in query:
            docs = sorted(docs, key=lambda d: d["price"], reverse=True)

        if "@limit" in params:
            docs = docs[: params["@limit"]]

        return copy.deepcopy(docs)


def make_product_input(**overrides) -> ProductInput:
    fields = {
        "title": "Running Sneakers",
        "image": "https://images.example.com/sneakers.jpg",
        "category": "Shoes",
        "price": 129.99,
        "availability": True,
        "description": "Lightweight running sneakers with breathable mesh upper.",
    }
    fields.update(overrides)
    return ProductInput(**fields)


@pytest.fixture
def cosmos_client():
    """Empty in-memory product container."""
    return InMemoryCosmosClient()


@pytest.fixture
def product_service(cosmos_client):
    """ProductService bound to the in-memory container."""
    return ProductService(cosmos_client)


@pytest.fixture
def product_input():
    """Factory for valid product payloads."""
    return make_product_input


@pytest.fixture
def api_client(cosmos_client):
    """TestClient whose product routes use the in-memory container."""
    app = create_app()
    app.dependency_overrides[get_product_service] = lambda: ProductService(cosmos_client)
    with TestClient(app) as client:
        yield client
