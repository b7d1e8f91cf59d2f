"""Catalog cache slice: the products currently shown to the user."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from catalog.models.product import Product


@dataclass(frozen=True)
class ProductsState:
    items: Tuple[Product, ...] = ()
    loading: bool = False
    error: Optional[str] = None


class ProductsAction:
    """Base class for actions handled by the products reducer."""


@dataclass(frozen=True)
class SetProducts(ProductsAction):
    items: Tuple[Product, ...]


@dataclass(frozen=True)
class AddProduct(ProductsAction):
    product: Product


@dataclass(frozen=True)
class UpdateProduct(ProductsAction):
    product: Product


@dataclass(frozen=True)
class DeleteProduct(ProductsAction):
    product_id: str


@dataclass(frozen=True)
class SetLoading(ProductsAction):
    loading: bool


@dataclass(frozen=True)
class SetError(ProductsAction):
    error: Optional[str]


def reduce_products(state: ProductsState, action: ProductsAction) -> ProductsState:
    """Apply a products action and return the new state."""
    if isinstance(action, SetProducts):
        return replace(state, items=tuple(action.items))
    if isinstance(action, AddProduct):
        return replace(state, items=state.items + (action.product,))
    if isinstance(action, UpdateProduct):
        # Unknown ids leave the list untouched
        items = tuple(
            action.product if item.id == action.product.id else item for item in state.items
        )
        return replace(state, items=items)
    if isinstance(action, DeleteProduct):
        return replace(
            state, items=tuple(item for item in state.items if item.id != action.product_id)
        )
    if isinstance(action, SetLoading):
        return replace(state, loading=action.loading)
    if isinstance(action, SetError):
        return replace(state, error=action.error)
    raise TypeError(f"Unsupported products action: {type(action).__name__}")
