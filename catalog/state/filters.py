"""Filter selection slice and its translation into listing parameters."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from catalog.services.query_builder import SortOrder

# The price slider tops out here; its maximum means "no limit".
MAX_PRICE_CEILING = 1000


@dataclass(frozen=True)
class FilterState:
    search_query: str = ""
    selected_categories: Tuple[str, ...] = ()
    max_price: float = 0  # 0 means unbounded
    sort: Optional[SortOrder] = None


class FilterAction:
    """Base class for actions handled by the filters reducer."""


@dataclass(frozen=True)
class SetSearchQuery(FilterAction):
    query: str


@dataclass(frozen=True)
class ToggleCategory(FilterAction):
    category: str


@dataclass(frozen=True)
class SetMaxPrice(FilterAction):
    max_price: float


@dataclass(frozen=True)
class SetSort(FilterAction):
    sort: Optional[SortOrder]


@dataclass(frozen=True)
class ResetFilters(FilterAction):
    pass


def reduce_filters(state: FilterState, action: FilterAction) -> FilterState:
    """Apply a filters action and return the new state."""
    if isinstance(action, SetSearchQuery):
        return replace(state, search_query=action.query)
    if isinstance(action, ToggleCategory):
        if action.category in state.selected_categories:
            categories = tuple(c for c in state.selected_categories if c != action.category)
        else:
            categories = state.selected_categories + (action.category,)
        return replace(state, selected_categories=categories)
    if isinstance(action, SetMaxPrice):
        return replace(state, max_price=action.max_price)
    if isinstance(action, SetSort):
        return replace(state, sort=action.sort)
    if isinstance(action, ResetFilters):
        return FilterState()
    raise TypeError(f"Unsupported filters action: {type(action).__name__}")


def to_query_params(state: FilterState) -> dict[str, str]:
    """
    Build ``GET /products`` query parameters for a filter selection.

    Args:
        state: Current filter selection.

    Returns:
        Parameters with only the active filters set.
    """
    params: dict[str, str] = {}
    search = state.search_query.strip()
    if search:
        params["search"] = search
    if state.selected_categories:
        params["category"] = ",".join(state.selected_categories)
    if 0 < state.max_price < MAX_PRICE_CEILING:
        params["maxPrice"] = f"{state.max_price:g}"
    if state.sort is not None:
        params["sortBy"] = state.sort.value
    return params
