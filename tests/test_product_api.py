"""Tests for the product HTTP API.

These tests verify:
- Response envelope and status codes for each route
- Mapping of catalog errors to 400/404/409/500
- Query-string filters reaching the service
"""

import json
import uuid

import pytest
from fastapi.testclient import TestClient

from catalog.api import get_product_service
from catalog.api.controller import product_controller
from catalog.main import create_app
from catalog.services import ProductService

PRODUCT_BODY = {
    "title": "Wireless Earbuds",
    "image": "https://images.example.com/earbuds.jpg",
    "category": "Electronics",
    "price": 99.99,
    "description": "Noise-cancelling wireless earbuds.",
}


def _create(api_client, **overrides):
    body = {**PRODUCT_BODY, **overrides}
    resp = api_client.post("/products", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


class TestHealth:
    def test_health_check(self, api_client):
        resp = api_client.get("/health")

        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}


class TestCreateRoute:
    """Test POST /products."""

    def test_create_returns_201_with_product(self, api_client):
        resp = api_client.post("/products", json=PRODUCT_BODY)
        body = resp.json()

        assert resp.status_code == 201
        assert body["success"] is True
        assert body["data"]["slug"] == "wireless-earbuds"
        assert body["data"]["availability"] is True
        assert "_id" in body["data"]
        assert "createdAt" in body["data"] and "updatedAt" in body["data"]

        print(f"Created: {body['data']['_id']}")

    def test_missing_description_returns_400(self, api_client, cosmos_client):
        body = {k: v for k, v in PRODUCT_BODY.items() if k != "description"}

        resp = api_client.post("/products", json=body)

        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Missing required fields"}
        assert cosmos_client.items == {}

    def test_price_as_string_is_accepted(self, api_client):
        """Test that numeric strings are coerced like the form sends them."""
        data = _create(api_client, price="19.5")

        assert data["price"] == 19.5

    def test_malformed_price_returns_400(self, api_client):
        resp = api_client.post("/products", json={**PRODUCT_BODY, "price": "cheap"})

        assert resp.status_code == 400
        assert resp.json()["success"] is False

    @pytest.mark.parametrize("price", ['"inf"', '"nan"', '"-Infinity"', "1e999"])
    def test_non_finite_price_returns_400(self, api_client, cosmos_client, price):
        """Test that prices which cannot be stored as finite numbers are rejected."""
        body = json.dumps({k: v for k, v in PRODUCT_BODY.items() if k != "price"})
        raw = body[:-1] + f', "price": {price}}}'

        resp = api_client.post(
            "/products", content=raw, headers={"Content-Type": "application/json"}
        )

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "price" in resp.json()["error"]
        assert cosmos_client.items == {}
        assert api_client.get("/products").status_code == 200

    def test_non_object_body_returns_400(self, api_client):
        resp = api_client.post("/products", json=["not", "an", "object"])

        assert resp.status_code == 400

    def test_duplicate_slug_returns_409(self, api_client):
        _create(api_client)

        resp = api_client.post("/products", json={**PRODUCT_BODY, "title": "wireless earbuds!"})

        assert resp.status_code == 409
        assert resp.json() == {
            "success": False,
            "error": "A product with this slug already exists",
        }


class TestReadRoutes:
    """Test GET /products and GET /products/{identifier}."""

    def test_list_with_filters(self, api_client):
        _create(api_client, title="Cheap Cable", price=9.99)
        _create(api_client, title="Headphones", price=59.0)
        _create(api_client, title="Sneakers", category="Shoes", price=80.0)

        resp = api_client.get(
            "/products",
            params={"category": "Electronics", "minPrice": "5", "maxPrice": "60", "sortBy": "high"},
        )
        body = resp.json()

        assert resp.status_code == 200
        assert body["success"] is True
        assert [p["title"] for p in body["data"]] == ["Headphones", "Cheap Cable"]

    def test_malformed_limit_is_ignored(self, api_client):
        _create(api_client)

        resp = api_client.get("/products", params={"limit": "lots"})

        assert resp.status_code == 200
        assert len(resp.json()["data"]) == 1

    def test_malformed_price_bound_returns_400(self, api_client):
        resp = api_client.get("/products", params={"maxPrice": "abc"})

        assert resp.status_code == 400
        assert "maxPrice" in resp.json()["error"]

    def test_get_by_key_and_slug(self, api_client):
        created = _create(api_client)

        by_key = api_client.get(f"/products/{created['_id']}")
        by_slug = api_client.get(f"/products/{created['slug']}")

        assert by_key.status_code == 200
        assert by_key.json() == by_slug.json()

    def test_get_unknown_returns_404(self, api_client):
        resp = api_client.get(f"/products/{uuid.uuid4()}")

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "error": "Product not found"}

    def test_related_products(self, api_client):
        main = _create(api_client, title="Phone")
        _create(api_client, title="Charger")
        _create(api_client, title="Jeans", category="Clothing")

        resp = api_client.get(f"/products/{main['slug']}/related")

        assert resp.status_code == 200
        assert [p["title"] for p in resp.json()["data"]] == ["Charger"]

    def test_related_for_unknown_product_returns_404(self, api_client):
        resp = api_client.get("/products/missing/related")

        assert resp.status_code == 404

    def test_list_persistence_failure_returns_500(self, api_client, cosmos_client):
        cosmos_client.fail_queries = True

        resp = api_client.get("/products")

        assert resp.status_code == 500
        assert resp.json()["success"] is False
        assert resp.json()["error"].startswith("Failed to fetch products")


class TestUpdateRoute:
    """Test PUT /products/{identifier}."""

    def test_partial_update(self, api_client):
        created = _create(api_client)

        resp = api_client.put(f"/products/{created['_id']}", json={"price": 79.0})
        data = resp.json()["data"]

        assert resp.status_code == 200
        assert data["price"] == 79.0
        assert data["slug"] == created["slug"]
        assert data["title"] == created["title"]

    def test_title_update_changes_slug(self, api_client):
        created = _create(api_client)

        resp = api_client.put(f"/products/{created['slug']}", json={"title": "Pro Earbuds 2"})

        assert resp.json()["data"]["slug"] == "pro-earbuds-2"
        assert api_client.get("/products/pro-earbuds-2").status_code == 200

    def test_update_unknown_returns_404(self, api_client):
        resp = api_client.put("/products/missing", json={"price": 1})

        assert resp.status_code == 404

    def test_update_conflict_returns_409(self, api_client):
        _create(api_client, title="Alpha")
        beta = _create(api_client, title="Beta")

        resp = api_client.put(f"/products/{beta['_id']}", json={"title": "ALPHA"})

        assert resp.status_code == 409

    def test_update_invalid_returns_400(self, api_client):
        created = _create(api_client)

        resp = api_client.put(f"/products/{created['_id']}", json={"price": -1})

        assert resp.status_code == 400


class TestDeleteRoute:
    """Test DELETE /products/{identifier}."""

    def test_delete(self, api_client, cosmos_client):
        created = _create(api_client)

        resp = api_client.delete(f"/products/{created['slug']}")

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Product deleted successfully"}
        assert cosmos_client.items == {}

    def test_delete_unknown_returns_404(self, api_client, cosmos_client):
        _create(api_client)

        resp = api_client.delete(f"/products/{uuid.uuid4()}")

        assert resp.status_code == 404
        assert len(cosmos_client.items) == 1


class TestUnexpectedErrors:
    """Test that failures outside the catalog error types keep the envelope."""

    @pytest.fixture
    def lenient_client(self, cosmos_client):
        app = create_app()
        app.dependency_overrides[get_product_service] = lambda: ProductService(cosmos_client)
        return TestClient(app, raise_server_exceptions=False)

    def test_unhandled_exception_returns_json_500(self, lenient_client, cosmos_client):
        async def broken_query(*args, **kwargs):
            raise RuntimeError("query engine exploded")

        cosmos_client.query_items = broken_query

        resp = lenient_client.get("/products")

        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        assert resp.json() == {"success": False, "error": "query engine exploded"}

    def test_corrupt_stored_document_returns_json_500(self, lenient_client, cosmos_client):
        cosmos_client.items["broken"] = {"id": "broken", "type": "product", "slug": "broken"}

        resp = lenient_client.get("/products")

        assert resp.status_code == 500
        assert resp.json()["success"] is False

    def test_malformed_connection_string_returns_json_500(self, monkeypatch):
        """Test that a failure while opening the shared connection keeps the envelope."""

        async def bad_connection():
            raise ValueError("Connection string missing required connection details.")

        monkeypatch.setattr(product_controller, "get_cosmos_client", bad_connection)
        client = TestClient(create_app(), raise_server_exceptions=False)

        resp = client.get("/products/running-sneakers")

        assert resp.status_code == 500
        assert resp.json() == {
            "success": False,
            "error": "Connection string missing required connection details.",
        }
