"""Seed the product container with sample products."""

import asyncio
import logging
from typing import Iterable, Tuple

from catalog.clients.cosmosdb_client import close_cosmos_client, get_cosmos_client
from catalog.config.configuration import get_config
from catalog.models.product import ProductInput
from catalog.services.errors import DuplicateSlugError
from catalog.services.product_service import ProductService

logger = logging.getLogger(__name__)

SEED_PRODUCTS = [
    ProductInput(
        title="Wireless Earbuds",
        image="https://images.unsplash.com/photo-1590658268037-6bf12165a8df?w=500",
        category="Electronics",
        price=99.99,
        availability=True,
        description="High-quality wireless earbuds with noise cancellation and long battery life. Perfect for music lovers and professionals on the go.",
    ),
    ProductInput(
        title="Classic Denim Jeans",
        image="https://images.unsplash.com/photo-1542272604-787c3835535d?w=500",
        category="Clothing",
        price=79.99,
        availability=True,
        description="Comfortable and stylish denim jeans with a perfect fit. Made from premium quality cotton denim for durability and comfort.",
    ),
    ProductInput(
        title="Running Sneakers",
        image="https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=500",
        category="Shoes",
        price=129.99,
        availability=True,
        description="Lightweight running sneakers with excellent cushioning and breathable mesh upper. Ideal for daily runs and workouts.",
    ),
    ProductInput(
        title="Leather Watch",
        image="https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=500",
        category="Accessories",
        price=199.99,
        availability=True,
        description="Elegant leather strap watch with a classic design. Perfect for both casual and formal occasions.",
    ),
    ProductInput(
        title="Smartphone Case",
        image="https://images.unsplash.com/photo-1556656793-08538906a9f8?w=500",
        category="Electronics",
        price=29.99,
        availability=True,
        description="Protective smartphone case with shock absorption technology. Available in multiple colors to match your style.",
    ),
    ProductInput(
        title="Cotton T-Shirt",
        image="https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500",
        category="Clothing",
        price=24.99,
        availability=True,
        description="Soft and comfortable cotton t-shirt in various colors. Perfect for everyday wear with a relaxed fit.",
    ),
    ProductInput(
        title="Casual Loafers",
        image="https://images.unsplash.com/photo-1549298916-b41d501d3772?w=500",
        category="Shoes",
        price=89.99,
        availability=True,
        description="Comfortable casual loafers made from genuine leather. Great for office wear and weekend outings.",
    ),
    ProductInput(
        title="Sunglasses",
        image="https://images.unsplash.com/photo-1572635196237-14b3f281503f?w=500",
        category="Accessories",
        price=49.99,
        availability=True,
        description="Stylish sunglasses with UV protection. Modern design with polarized lenses for optimal eye protection.",
    ),
]


async def seed_products(
    service: ProductService,
    products: Iterable[ProductInput] = SEED_PRODUCTS,
) -> Tuple[int, int]:
    """
    Create sample products, skipping any whose slug already exists.

    Args:
        service: Product service bound to the target container.
        products: Products to insert.

    Returns:
        Tuple of (created, skipped) counts.
    """
    created = 0
    skipped = 0

    for product in products:
        try:
            stored = await service.create_product(product)
        except DuplicateSlugError:
            logger.warning(f"Skipping '{product.title}': slug already exists")
            skipped += 1
            continue

        logger.info(f"Seeded {stored.slug}")
        created += 1

    logger.info(f"Seeding complete: {created} created, {skipped} skipped")
    return created, skipped


async def main() -> None:
    """Seed the configured container."""
    client = await get_cosmos_client()
    try:
        await seed_products(ProductService(client))
    finally:
        await close_cosmos_client()


if __name__ == "__main__":
    logging.basicConfig(level=get_config().logging.level)
    asyncio.run(main())
