"""HTTP controller for product CRUD."""

import logging
from typing import Any, Optional

from azure.core.exceptions import AzureError
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from catalog.clients import get_cosmos_client
from catalog.models import ProductInput
from catalog.services import ProductFilters, ProductService, UnexpectedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])


async def get_product_service() -> ProductService:
    """Build a ProductService on the shared Cosmos DB connection."""
    try:
        client = await get_cosmos_client()
    except AzureError as e:
        logger.exception(f"Could not connect to Cosmos DB: {e}")
        raise UnexpectedError(f"Failed to connect to the product database: {e}") from e
    return ProductService(client)


def _success(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True, "data": data})


@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    limit: Optional[str] = None,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """List products, optionally filtered, sorted and capped."""
    filters = ProductFilters.from_params(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        limit=limit,
    )
    products = await service.list_products(filters)
    return _success([product.to_response() for product in products])


@router.post("")
async def create_product(
    payload: ProductInput,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Create a product; its slug is derived from the title."""
    product = await service.create_product(payload)
    return _success(product.to_response(), status_code=201)


@router.get("/{identifier}")
async def get_product(
    identifier: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Get a product by key or slug."""
    product = await service.get_product(identifier)
    return _success(product.to_response())


@router.get("/{identifier}/related")
async def get_related_products(
    identifier: str,
    limit: int = Query(4, ge=1, le=20),
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Other products in the same category as the given one."""
    product = await service.get_product(identifier)
    related = await service.related_products(product, limit=limit)
    return _success([item.to_response() for item in related])


@router.put("/{identifier}")
async def update_product(
    identifier: str,
    payload: ProductInput,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Partially update a product by key or slug."""
    product = await service.update_product(identifier, payload)
    return _success(product.to_response())


@router.delete("/{identifier}")
async def delete_product(
    identifier: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """Delete a product by key or slug."""
    await service.delete_product(identifier)
    return JSONResponse(
        status_code=200,
        content={"success": True, "message": "Product deleted successfully"},
    )
