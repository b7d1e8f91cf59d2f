"""Offline data loading."""

from catalog.ingestion.seed_products import SEED_PRODUCTS, seed_products

__all__ = ["SEED_PRODUCTS", "seed_products"]
