"""Entity: Product."""

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

UPLOAD_FAILED = "Failed to upload image"


class ImageRef(BaseModel):
    """Outcome of one image upload.

    A successful upload carries ``url`` and ``image_public_id``; a failed one
    carries only ``error``. Both kinds are stored on the product.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str | None = None
    image_public_id: str | None = None
    error: str | None = None

    @classmethod
    def failed(cls, message: str = UPLOAD_FAILED) -> "ImageRef":
        return cls(error=message)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @model_serializer(mode="wrap")
    def _drop_empty(self, handler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class Product(BaseModel):
    """Product entity representing a catalog item.

    Serialises with camelCase keys (``isAvailable``, ``createdAt``) while
    attributes stay snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Assigned on creation, never changes",
    )
    name: str = Field(description="Display name")
    slug: str = Field(description="URL-safe identifier derived from the name")
    description: str = Field(description="Free-text description")
    price: float = Field(description="Unit price")
    quantity: int = Field(description="Units in stock")
    category: str | None = Field(default=None, description="Optional category")
    images: list[ImageRef] = Field(default_factory=list)
    is_available: bool = Field(default=True, description="Listed in search results")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def __eq__(self, other: Any) -> bool:
        """Compare products by identity, ignoring timestamps."""
        if not isinstance(other, Product):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class ProductCreate(BaseModel):
    """Fields accepted when creating a product.

    Everything is optional at the type level so that missing input surfaces as
    a catalog validation error rather than a schema error.
    """

    name: str | None = None
    description: str | None = None
    price: float | None = None
    quantity: int | None = None
    category: str | None = None

    def missing_fields(self) -> list[str]:
        missing = [
            field
            for field in ("name", "description")
            if not (getattr(self, field) or "").strip()
        ]
        missing += [field for field in ("price", "quantity") if getattr(self, field) is None]
        return missing


class ProductUpdate(BaseModel):
    """Fields accepted when updating a product; ``None`` leaves a field as is."""

    name: str | None = None
    description: str | None = None
    price: float | None = None
    category: str | None = None
    quantity: int | None = None

    def present_fields(self) -> dict[str, Any]:
        return {
            field: value
            for field, value in self.model_dump().items()
            if value is not None and value != ""
        }
