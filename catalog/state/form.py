"""Form draft slice for the create/edit product dialog."""

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from catalog.models.product import Product, ProductInput
from catalog.services.errors import ValidationError
from catalog.services.slug import generate_slug

EDITABLE_FIELDS = ("title", "image", "category", "price", "availability", "description")


@dataclass(frozen=True)
class FormState:
    dialog_open: bool = False
    editing_product_id: Optional[str] = None
    title: str = ""
    image: str = ""
    category: str = ""
    price: str = ""  # kept as typed text until submit
    availability: bool = True
    description: str = ""


class FormAction:
    """Base class for actions handled by the form reducer."""


@dataclass(frozen=True)
class SetDialogOpen(FormAction):
    open: bool


@dataclass(frozen=True)
class SetFormField(FormAction):
    field: str
    value: Any


@dataclass(frozen=True)
class ResetForm(FormAction):
    pass


@dataclass(frozen=True)
class EditProduct(FormAction):
    product: Product


def reduce_form(state: FormState, action: FormAction) -> FormState:
    """Apply a form action and return the new state."""
    if isinstance(action, SetDialogOpen):
        return replace(state, dialog_open=action.open)
    if isinstance(action, SetFormField):
        if action.field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {action.field}")
        return replace(state, **{action.field: action.value})
    if isinstance(action, ResetForm):
        # Clears the draft but leaves the dialog as it is
        cleared = {f.name: f.default for f in fields(FormState) if f.name != "dialog_open"}
        return replace(state, **cleared)
    if isinstance(action, EditProduct):
        product = action.product
        return replace(
            state,
            editing_product_id=product.id,
            title=product.title,
            image=product.image,
            category=product.category,
            price=_format_price(product.price),
            availability=product.availability,
            description=product.description,
        )
    raise TypeError(f"Unsupported form action: {type(action).__name__}")


def _format_price(price: float) -> str:
    return str(int(price)) if float(price).is_integer() else str(price)


def is_editing(state: FormState) -> bool:
    return state.editing_product_id is not None


def slug_preview(state: FormState) -> str:
    """Slug the current title would get; empty while no title is typed."""
    if not state.title.strip():
        return ""
    return generate_slug(state.title)


def to_product_input(state: FormState) -> ProductInput:
    """
    Convert the draft into an API payload.

    Raises:
        ValidationError: If a field is empty or the price is not a number.
    """
    required = (state.title, state.image, state.category, state.price, state.description)
    if not all(value.strip() for value in required):
        raise ValidationError("Please fill in all required fields")

    try:
        price = float(state.price)
    except ValueError as e:
        raise ValidationError("Price must be a number") from e
    if not math.isfinite(price) or price < 0:
        raise ValidationError("Price must be a non-negative number")

    return ProductInput(
        title=state.title,
        image=state.image,
        category=state.category,
        price=price,
        availability=state.availability,
        description=state.description,
    )
