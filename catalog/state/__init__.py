"""Client-side state: products cache, filter selection and form draft."""

from catalog.state.filters import (
    FilterState,
    ResetFilters,
    SetMaxPrice,
    SetSearchQuery,
    SetSort,
    ToggleCategory,
    to_query_params,
)
from catalog.state.form import (
    EditProduct,
    FormState,
    ResetForm,
    SetDialogOpen,
    SetFormField,
    is_editing,
    slug_preview,
    to_product_input,
)
from catalog.state.products import (
    AddProduct,
    DeleteProduct,
    ProductsState,
    SetError,
    SetLoading,
    SetProducts,
    UpdateProduct,
)
from catalog.state.store import CatalogStore, load_products, submit_form

__all__ = [
    "AddProduct",
    "CatalogStore",
    "DeleteProduct",
    "EditProduct",
    "FilterState",
    "FormState",
    "ProductsState",
    "ResetFilters",
    "ResetForm",
    "SetDialogOpen",
    "SetError",
    "SetFormField",
    "SetLoading",
    "SetMaxPrice",
    "SetProducts",
    "SetSearchQuery",
    "SetSort",
    "ToggleCategory",
    "UpdateProduct",
    "is_editing",
    "load_products",
    "slug_preview",
    "submit_form",
    "to_product_input",
]
