"""HTTP controllers."""

from catalog.api.controller.product_controller import get_product_service
from catalog.api.controller.product_controller import router as product_router
from catalog.api.controller.upload_controller import get_upload_service
from catalog.api.controller.upload_controller import router as upload_router

__all__ = ["get_product_service", "get_upload_service", "product_router", "upload_router"]
