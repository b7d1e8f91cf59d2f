"""Product models for the catalog and its document store."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Value of the partition key field on every product document.
PRODUCT_DOCUMENT_TYPE = "product"


class ProductInput(BaseModel):
    """Caller-supplied product fields.

    Every field is optional so create and update share one payload shape;
    which fields must be present is decided by the operation.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    image: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, allow_inf_nan=False)
    availability: Optional[bool] = None
    description: Optional[str] = None


class Product(BaseModel):
    """A persisted product.

    The key is exposed as ``_id`` on the wire and stored as ``id`` in the
    container.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    title: str = Field(min_length=1)
    image: str = Field(min_length=1)
    category: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    availability: bool = True
    slug: str = Field(min_length=1)
    description: str = Field(min_length=1)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Product":
        """Build a product from a stored document, ignoring system fields."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Render the product as a container document."""
        document = self.model_dump(mode="json", by_alias=True)
        document["id"] = document.pop("_id")
        document["type"] = PRODUCT_DOCUMENT_TYPE
        return document

    def to_response(self) -> dict[str, Any]:
        """Render the product in its JSON wire shape."""
        return self.model_dump(mode="json", by_alias=True)
