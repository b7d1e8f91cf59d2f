"""Product CRUD operations against the Cosmos DB container.

Single-item operations accept either the product key (a UUID) or its slug.
Both resolve through ``ProductService._resolve``:
- a canonical UUID is tried as a point read first
- anything else, or a point-read miss, is looked up by slug
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import CosmosResourceExistsError, CosmosResourceNotFoundError
from pydantic import ValidationError as PydanticValidationError

from ..clients import CosmosDBClient
from ..models import PRODUCT_DOCUMENT_TYPE, Product, ProductInput
from .errors import DuplicateSlugError, NotFoundError, UnexpectedError, ValidationError
from .query_builder import ProductFilters, build_product_query
from .slug import generate_slug

logger = logging.getLogger(__name__)

SLUG_LOOKUP_QUERY = "SELECT * FROM c WHERE c.type = @type AND c.slug = @slug"

REQUIRED_TEXT_FIELDS = ("title", "image", "category", "description")

DUPLICATE_SLUG_MESSAGE = "A product with this slug already exists"
NOT_FOUND_MESSAGE = "Product not found"


def is_native_key(identifier: str) -> bool:
    """Check whether an identifier is in the product key format (canonical UUID)."""
    try:
        return str(uuid.UUID(identifier)) == identifier
    except (ValueError, AttributeError, TypeError):
        return False


def _validation_message(error: PydanticValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in error.errors()
    )
    return f"Invalid product: {details}"


class ProductService:
    """Service for listing, reading and mutating products."""

    def __init__(self, cosmos_client: CosmosDBClient):
        """Initialize the product service.

        Args:
            cosmos_client: Connected Cosmos DB client for the product container.
        """
        self._client = cosmos_client
        self._partition_key = PRODUCT_DOCUMENT_TYPE

    async def _resolve(self, identifier: str) -> dict[str, Any]:
        """Find the stored document for a key or slug.

        Raises:
            NotFoundError: If neither lookup matches.
            AzureError: On persistence failures.
        """
        if is_native_key(identifier):
            try:
                return await self._client.read_item(identifier, self._partition_key)
            except CosmosResourceNotFoundError:
                logger.debug(f"No product with key {identifier}, trying slug lookup")

        matches = await self._client.query_items(
            SLUG_LOOKUP_QUERY,
            parameters=[
                {"name": "@type", "value": PRODUCT_DOCUMENT_TYPE},
                {"name": "@slug", "value": identifier},
            ],
            partition_key=self._partition_key,
        )
        if not matches:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return matches[0]

    async def list_products(self, filters: ProductFilters) -> list[Product]:
        """
        List products matching a set of filters.

        Args:
            filters: Parsed listing filters.

        Returns:
            Matching products, ordered and capped as the filters request.

        Raises:
            UnexpectedError: On persistence failures.
        """
        query = build_product_query(filters)
        try:
            documents = await self._client.query_items(
                query.text,
                parameters=query.parameters,
                partition_key=self._partition_key,
            )
        except AzureError as e:
            logger.exception(f"Error fetching products: {e}")
            raise UnexpectedError(f"Failed to fetch products: {e}") from e

        return [Product.from_document(document) for document in documents]

    async def get_product(self, identifier: str) -> Product:
        """
        Get a product by key or slug.

        Raises:
            NotFoundError: If no product matches.
            UnexpectedError: On persistence failures.
        """
        try:
            document = await self._resolve(identifier)
        except AzureError as e:
            logger.exception(f"Error fetching product {identifier}: {e}")
            raise UnexpectedError(f"Failed to fetch product: {e}") from e

        return Product.from_document(document)

    async def related_products(self, product: Product, limit: int = 4) -> list[Product]:
        """
        Other products in the same category.

        Best-effort: a failed lookup is logged and yields an empty list.

        Args:
            product: Product to find neighbours for.
            limit: Maximum number of related products.

        Returns:
            Up to ``limit`` products, never including ``product`` itself.
        """
        filters = ProductFilters(categories=(product.category,), limit=limit + 1)
        try:
            candidates = await self.list_products(filters)
        except UnexpectedError as e:
            logger.warning(f"Related products lookup failed for {product.slug}: {e}")
            return []

        return [candidate for candidate in candidates if candidate.id != product.id][:limit]

    async def create_product(self, data: ProductInput) -> Product:
        """
        Create a product.

        Args:
            data: Product fields; title, image, category, price and
                  description are required.

        Returns:
            The persisted product with its key, slug and timestamps.

        Raises:
            ValidationError: If a required field is missing or invalid.
            DuplicateSlugError: If the derived slug is already taken.
            UnexpectedError: On persistence failures.
        """
        missing = [name for name in REQUIRED_TEXT_FIELDS if not getattr(data, name)]
        if missing or data.price is None:
            raise ValidationError("Missing required fields")

        now = datetime.now(timezone.utc)
        try:
            product = Product(
                id=str(uuid.uuid4()),
                title=data.title,
                image=data.image,
                category=data.category,
                price=data.price,
                availability=data.availability if data.availability is not None else True,
                slug=generate_slug(data.title),
                description=data.description,
                created_at=now,
                updated_at=now,
            )
        except PydanticValidationError as e:
            raise ValidationError(_validation_message(e)) from e

        try:
            document = await self._client.create_item(product.to_document())
        except CosmosResourceExistsError as e:
            raise DuplicateSlugError(DUPLICATE_SLUG_MESSAGE) from e
        except AzureError as e:
            logger.exception(f"Error creating product: {e}")
            raise UnexpectedError(f"Failed to create product: {e}") from e

        logger.info(f"Created product {product.id} with slug {product.slug}")
        return Product.from_document(document)

    async def update_product(self, identifier: str, data: ProductInput) -> Product:
        """
        Apply a partial update to a product.

        Only fields set on ``data`` change. A new title also replaces the
        slug. The merged product is validated like a new one.

        Args:
            identifier: Product key or slug.
            data: Fields to change.

        Returns:
            The updated product.

        Raises:
            NotFoundError: If no product matches.
            ValidationError: If the merged product is invalid.
            DuplicateSlugError: If the new slug is already taken.
            UnexpectedError: On persistence failures.
        """
        try:
            document = await self._resolve(identifier)
        except AzureError as e:
            logger.exception(f"Error fetching product {identifier}: {e}")
            raise UnexpectedError(f"Failed to update product: {e}") from e

        current = Product.from_document(document)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("title") is not None:
            changes["slug"] = generate_slug(changes["title"])

        merged = current.model_dump()
        merged.update(changes)
        merged["updated_at"] = datetime.now(timezone.utc)

        try:
            product = Product.model_validate(merged)
        except PydanticValidationError as e:
            raise ValidationError(_validation_message(e)) from e

        try:
            updated = await self._client.replace_item(product.id, product.to_document())
        except CosmosResourceExistsError as e:
            raise DuplicateSlugError(DUPLICATE_SLUG_MESSAGE) from e
        except CosmosResourceNotFoundError as e:
            raise NotFoundError(NOT_FOUND_MESSAGE) from e
        except AzureError as e:
            logger.exception(f"Error updating product {identifier}: {e}")
            raise UnexpectedError(f"Failed to update product: {e}") from e

        if product.slug != current.slug:
            logger.info(f"Updated product {product.id}, slug {current.slug} -> {product.slug}")
        else:
            logger.info(f"Updated product {product.id}")
        return Product.from_document(updated)

    async def delete_product(self, identifier: str) -> Product:
        """
        Delete a product by key or slug.

        Returns:
            The product as it was before deletion.

        Raises:
            NotFoundError: If no product matches.
            UnexpectedError: On persistence failures.
        """
        try:
            document = await self._resolve(identifier)
            await self._client.delete_item(document["id"], self._partition_key)
        except CosmosResourceNotFoundError as e:
            raise NotFoundError(NOT_FOUND_MESSAGE) from e
        except AzureError as e:
            logger.exception(f"Error deleting product {identifier}: {e}")
            raise UnexpectedError(f"Failed to delete product: {e}") from e

        logger.info(f"Deleted product {document['id']}")
        return Product.from_document(document)
