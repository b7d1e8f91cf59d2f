"""Client-side store combining the products, filters and form slices."""

import logging
from dataclasses import dataclass, field
from typing import Union

from catalog.clients.catalog_api_client import CatalogAPIClient, CatalogAPIError
from catalog.services.errors import ValidationError
from catalog.state.filters import FilterAction, FilterState, reduce_filters, to_query_params
from catalog.state.form import (
    FormAction,
    FormState,
    ResetForm,
    SetDialogOpen,
    is_editing,
    reduce_form,
    to_product_input,
)
from catalog.state.products import (
    AddProduct,
    ProductsAction,
    ProductsState,
    SetError,
    SetLoading,
    SetProducts,
    UpdateProduct,
    reduce_products,
)

logger = logging.getLogger(__name__)

Action = Union[ProductsAction, FilterAction, FormAction]


@dataclass
class CatalogStore:
    """Holds the three slices and routes actions to their reducers."""

    products: ProductsState = field(default_factory=ProductsState)
    filters: FilterState = field(default_factory=FilterState)
    form: FormState = field(default_factory=FormState)

    def dispatch(self, action: Action) -> None:
        if isinstance(action, ProductsAction):
            self.products = reduce_products(self.products, action)
        elif isinstance(action, FilterAction):
            self.filters = reduce_filters(self.filters, action)
        elif isinstance(action, FormAction):
            self.form = reduce_form(self.form, action)
        else:
            raise TypeError(f"Unsupported action: {type(action).__name__}")


async def load_products(store: CatalogStore, api: CatalogAPIClient) -> None:
    """Fetch the products matching the current filters into the store."""
    store.dispatch(SetLoading(True))
    store.dispatch(SetError(None))
    try:
        products = await api.list_products(to_query_params(store.filters))
        store.dispatch(SetProducts(tuple(products)))
    except CatalogAPIError as e:
        logger.error(f"Error fetching products: {e}")
        store.dispatch(SetError(str(e)))
    finally:
        store.dispatch(SetLoading(False))


async def submit_form(store: CatalogStore, api: CatalogAPIClient) -> bool:
    """
    Create or update the product staged in the form.

    On success the form is reset, the dialog closed, any earlier error
    cleared and the cached list updated. On failure the draft is kept
    and the error recorded.

    Returns:
        True if the product was saved.
    """
    try:
        payload = to_product_input(store.form)
        if is_editing(store.form):
            product = await api.update_product(store.form.editing_product_id, payload)
            store.dispatch(UpdateProduct(product))
        else:
            product = await api.create_product(payload)
            store.dispatch(AddProduct(product))
    except (ValidationError, CatalogAPIError) as e:
        store.dispatch(SetError(str(e)))
        return False

    store.dispatch(SetError(None))
    store.dispatch(ResetForm())
    store.dispatch(SetDialogOpen(False))
    return True
