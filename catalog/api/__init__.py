"""HTTP API package."""

from catalog.api.controller import (
    get_product_service,
    get_upload_service,
    product_router,
    upload_router,
)
from catalog.api.errors import register_exception_handlers

__all__ = [
    "get_product_service",
    "get_upload_service",
    "product_router",
    "register_exception_handlers",
    "upload_router",
]
