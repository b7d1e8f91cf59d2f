"""Async HTTP client for the catalog API."""

import logging
from typing import Any, Optional

import httpx

from catalog.models.product import Product, ProductInput
from catalog.models.upload import UploadResult

logger = logging.getLogger(__name__)


class CatalogAPIError(Exception):
    """Raised when a catalog API call fails; carries the server's error message."""

    pass


class CatalogAPIClient:
    """Thin wrapper over the ``{success, data | error}`` HTTP surface."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, fallback_error: str, **kwargs) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise CatalogAPIError(f"{fallback_error}: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict) or resp.is_error or not body.get("success"):
            message = body.get("error") if isinstance(body, dict) else None
            logger.debug(f"{method} {path} failed with status {resp.status_code}")
            raise CatalogAPIError(message or fallback_error)

        return body

    async def list_products(self, params: Optional[dict[str, Any]] = None) -> list[Product]:
        body = await self._request("GET", "/products", "Failed to fetch products", params=params)
        return [Product.model_validate(item) for item in body["data"]]

    async def get_product(self, identifier: str) -> Product:
        body = await self._request("GET", f"/products/{identifier}", "Failed to fetch product")
        return Product.model_validate(body["data"])

    async def related_products(self, identifier: str, limit: int = 4) -> list[Product]:
        body = await self._request(
            "GET",
            f"/products/{identifier}/related",
            "Failed to fetch related products",
            params={"limit": limit},
        )
        return [Product.model_validate(item) for item in body["data"]]

    async def create_product(self, data: ProductInput) -> Product:
        body = await self._request(
            "POST", "/products", "Failed to create product", json=data.model_dump(exclude_none=True)
        )
        return Product.model_validate(body["data"])

    async def update_product(self, identifier: str, data: ProductInput) -> Product:
        body = await self._request(
            "PUT",
            f"/products/{identifier}",
            "Failed to update product",
            json=data.model_dump(exclude_unset=True),
        )
        return Product.model_validate(body["data"])

    async def delete_product(self, identifier: str) -> str:
        body = await self._request("DELETE", f"/products/{identifier}", "Failed to delete product")
        return body.get("message", "")

    async def upload_image(self, filename: str, content: bytes, content_type: str) -> UploadResult:
        body = await self._request(
            "POST",
            "/upload",
            "Failed to upload image",
            files={"file": (filename, content, content_type)},
        )
        return UploadResult(url=body["data"]["url"], public_id=body["data"]["public_id"])
