"""Data models module."""

from catalog.models.product import PRODUCT_DOCUMENT_TYPE, Product, ProductInput
from catalog.models.upload import UploadResult

__all__ = ["PRODUCT_DOCUMENT_TYPE", "Product", "ProductInput", "UploadResult"]
