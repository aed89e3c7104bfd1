"""Data-access layer for products."""

import unicodedata
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from src.catalog.core.errors import PersistenceError

from .entity import ImageRef, Product
from .table import ProductTable


def search_key(text: str) -> str:
    """Normalise text for case-insensitive matching in any script."""
    return unicodedata.normalize("NFKC", text).casefold()


def _contains_pattern(value: str) -> str:
    escaped = search_key(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass
class ProductFilter:
    """Criteria for listing products.

    ``name_contains`` and ``description_contains`` are case-insensitive
    substring matches (compared through their casefolded search columns)
    combined with OR; the remaining criteria are ANDed.
    """

    name_contains: str | None = None
    description_contains: str | None = None
    is_available: bool | None = None
    exclude_id: str | None = None

    @classmethod
    def text(cls, term: str, **kwargs) -> "ProductFilter":
        """Match ``term`` against either the name or the description."""
        return cls(name_contains=term, description_contains=term, **kwargs)

    def clauses(self) -> list:
        clauses = []
        text_clauses = []
        if self.name_contains:
            text_clauses.append(
                col(ProductTable.name_search).like(_contains_pattern(self.name_contains), escape="\\")
            )
        if self.description_contains:
            text_clauses.append(
                col(ProductTable.description_search).like(
                    _contains_pattern(self.description_contains), escape="\\"
                )
            )
        if text_clauses:
            clauses.append(or_(*text_clauses))
        if self.is_available is not None:
            clauses.append(col(ProductTable.is_available) == self.is_available)
        if self.exclude_id is not None:
            clauses.append(col(ProductTable.id) != self.exclude_id)
        return clauses


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(
                "Product {} failed",
                action,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise PersistenceError(f"Failed to {action} product") from e

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            slug=row.slug,
            description=row.description,
            price=row.price,
            quantity=row.quantity,
            category=row.category,
            images=[ImageRef.model_validate(image) for image in row.images or []],
            is_available=row.is_available,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _dump_images(images: list[ImageRef]) -> list[dict]:
        return [image.model_dump(by_alias=True) for image in images]

    def create(self, product: Product) -> Product:
        row = ProductTable(
            id=product.id,
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            quantity=product.quantity,
            category=product.category,
            images=self._dump_images(product.images),
            is_available=product.is_available,
            name_search=search_key(product.name),
            description_search=search_key(product.description),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        with self._guard("create"):
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        return self._to_entity(row)

    def get(self, product_id: str) -> Product | None:
        with self._guard("load"):
            row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return self._to_entity(row)

    def get_by_slug(self, slug: str) -> Product | None:
        statement = select(ProductTable).where(ProductTable.slug == slug)
        with self._guard("load"):
            row = self._session.exec(statement).first()
        if row is None:
            return None
        return self._to_entity(row)

    def find(
        self,
        product_filter: ProductFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Product]:
        statement = select(ProductTable)
        if product_filter is not None:
            statement = statement.where(*product_filter.clauses())
        statement = statement.order_by(col(ProductTable.created_at), col(ProductTable.id)).offset(skip)
        if limit is not None:
            statement = statement.limit(limit)
        with self._guard("list"):
            rows = self._session.exec(statement).all()
        return [self._to_entity(row) for row in rows]

    def count(self, product_filter: ProductFilter | None = None) -> int:
        statement = select(func.count(col(ProductTable.id)))
        if product_filter is not None:
            statement = statement.where(*product_filter.clauses())
        with self._guard("count"):
            return self._session.exec(statement).one()

    def save(self, product: Product) -> Product:
        """Write every mutable field of an existing product back to the database."""
        with self._guard("save"):
            row = self._session.get(ProductTable, product.id)
            if row is None:
                raise PersistenceError(f"Product {product.id} no longer exists")
            row.name = product.name
            row.slug = product.slug
            row.description = product.description
            row.price = product.price
            row.quantity = product.quantity
            row.category = product.category
            row.images = self._dump_images(product.images)
            row.is_available = product.is_available
            row.name_search = search_key(product.name)
            row.description_search = search_key(product.description)
            row.updated_at = datetime.now(UTC)
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, product_id: str) -> int:
        """Delete a product by id and return the number of rows removed."""
        with self._guard("delete"):
            row = self._session.get(ProductTable, product_id)
            if row is None:
                return 0
            self._session.delete(row)
            self._session.commit()
        return 1
