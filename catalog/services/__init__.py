"""Service layer for catalog operations."""

from catalog.services.errors import (
    CatalogError,
    DuplicateSlugError,
    NotFoundError,
    UnexpectedError,
    UploadConfigError,
    ValidationError,
)
from catalog.services.product_service import ProductService, is_native_key
from catalog.services.query_builder import (
    ProductFilters,
    ProductQuery,
    SortOrder,
    build_product_query,
)
from catalog.services.slug import generate_slug
from catalog.services.upload_service import UploadService

__all__ = [
    "CatalogError",
    "DuplicateSlugError",
    "NotFoundError",
    "ProductFilters",
    "ProductQuery",
    "ProductService",
    "SortOrder",
    "UnexpectedError",
    "UploadConfigError",
    "UploadService",
    "ValidationError",
    "build_product_query",
    "generate_slug",
    "is_native_key",
]
