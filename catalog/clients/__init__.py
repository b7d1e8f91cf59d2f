"""Client modules for external services."""

from catalog.clients.catalog_api_client import CatalogAPIClient, CatalogAPIError
from catalog.clients.cloudinary_client import CloudinaryClient, CloudinaryUploadError
from catalog.clients.cosmosdb_client import (
    CosmosDBClient,
    close_cosmos_client,
    get_cosmos_client,
    reset_cosmos_client,
)

__all__ = [
    "CatalogAPIClient",
    "CatalogAPIError",
    "CloudinaryClient",
    "CloudinaryUploadError",
    "CosmosDBClient",
    "close_cosmos_client",
    "get_cosmos_client",
    "reset_cosmos_client",
]
