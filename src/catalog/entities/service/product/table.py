"""Product database table model."""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    ``images`` is stored as a JSON document, one object per upload outcome,
    using the same camelCase keys the API returns. ``name_search`` and
    ``description_search`` hold casefolded copies of the text columns so that
    substring matching ignores case for every script, not only ASCII.
    ``updated_at`` is maintained by the repository.
    """

    __tablename__ = "product"

    id: str = Field(primary_key=True, default_factory=lambda: str(uuid.uuid4()))
    name: str
    slug: str = Field(index=True)
    description: str
    price: float
    quantity: int
    category: str | None = None
    images: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    is_available: bool = Field(default=True, index=True)
    name_search: str = Field(default="")
    description_search: str = Field(default="")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
