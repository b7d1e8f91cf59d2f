"""Translate product filter parameters into a Cosmos DB SQL query."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from catalog.models.product import PRODUCT_DOCUMENT_TYPE
from catalog.services.errors import ValidationError


class SortOrder(str, Enum):
    """Price ordering accepted by the ``sortBy`` parameter."""

    ASCENDING_PRICE = "low"
    DESCENDING_PRICE = "high"


@dataclass(frozen=True)
class ProductFilters:
    """Optional restrictions for a product listing."""

    categories: Tuple[str, ...] = ()
    search: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: Optional[SortOrder] = None
    limit: Optional[int] = None

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        search: Optional[str] = None,
        min_price: Optional[str] = None,
        max_price: Optional[str] = None,
        sort_by: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "ProductFilters":
        """
        Build filters from raw query-string values.

        Args:
            category: Comma-separated category names.
            search: Case-insensitive title substring.
            min_price: Lower price bound.
            max_price: Upper price bound.
            sort_by: "low" or "high"; anything else means no ordering.
            limit: Maximum number of results.

        Returns:
            Parsed ProductFilters.

        Raises:
            ValidationError: If a price bound is not a finite number.
        """
        return cls(
            categories=parse_categories(category),
            search=search or None,
            min_price=parse_price(min_price, "minPrice"),
            max_price=parse_price(max_price, "maxPrice"),
            sort=parse_sort(sort_by),
            limit=parse_limit(limit),
        )


@dataclass(frozen=True)
class ProductQuery:
    """A parameterized Cosmos DB SQL query plus its sort order."""

    text: str
    parameters: List[dict[str, Any]] = field(default_factory=list)
    sort: Optional[SortOrder] = None


def parse_categories(value: Optional[str]) -> Tuple[str, ...]:
    """Split a comma-separated category list into trimmed, non-empty tokens."""
    if not value:
        return ()
    return tuple(token.strip() for token in value.split(",") if token.strip())


def parse_price(value: Optional[str], name: str) -> Optional[float]:
    """Parse a price bound; empty means absent."""
    if value is None or not str(value).strip():
        return None
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid {name}: {value!r}") from e
    if not math.isfinite(price):
        raise ValidationError(f"Invalid {name}: {value!r}")
    return price


def parse_sort(value: Optional[str]) -> Optional[SortOrder]:
    """Map a ``sortBy`` value to a SortOrder, ignoring unknown values."""
    try:
        return SortOrder(value)
    except ValueError:
        return None


def parse_limit(value: Any) -> Optional[int]:
    """Parse a result limit; malformed or non-positive values mean no limit."""
    if value is None or isinstance(value, bool):
        return None
    try:
        limit = int(str(value).strip())
    except ValueError:
        return None
    return limit if limit > 0 else None


def build_product_query(filters: ProductFilters) -> ProductQuery:
    """
    Build the listing query for a set of filters.

    Args:
        filters: Parsed listing filters.

    Returns:
        ProductQuery with SQL text and named parameters.
    """
    conditions = ["c.type = @type"]
    parameters: List[dict[str, Any]] = [{"name": "@type", "value": PRODUCT_DOCUMENT_TYPE}]

    if filters.categories:
        conditions.append("ARRAY_CONTAINS(@categories, c.category)")
        parameters.append({"name": "@categories", "value": list(filters.categories)})

    if filters.search:
        conditions.append("CONTAINS(c.title, @search, true)")
        parameters.append({"name": "@search", "value": filters.search})

    if filters.min_price is not None:
        conditions.append("c.price >= @min_price")
        parameters.append({"name": "@min_price", "value": filters.min_price})

    if filters.max_price is not None:
        conditions.append("c.price <= @max_price")
        parameters.append({"name": "@max_price", "value": filters.max_price})

    select = "SELECT"
    if filters.limit is not None:
        select = "SELECT TOP @limit"
        parameters.append({"name": "@limit", "value": filters.limit})

    text = f"{select} * FROM c WHERE {' AND '.join(conditions)}"

    if filters.sort is SortOrder.ASCENDING_PRICE:
        text += " ORDER BY c.price ASC"
    elif filters.sort is SortOrder.DESCENDING_PRICE:
        text += " ORDER BY c.price DESC"

    return ProductQuery(text=text, parameters=parameters, sort=filters.sort)
