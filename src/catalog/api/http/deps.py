"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.core.services import ImageStore, ProductService
from src.catalog.entities.service.product import ProductRepository
from src.catalog.runtime.context import get_config


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed once the request is done."""
    app_deps = get_app_dependencies(request)
    with app_deps.database_service.session_scope() as session:
        yield session


def get_image_store(request: Request) -> ImageStore:
    """Get the image store instance."""
    return get_app_dependencies(request).image_store


def get_product_repository(session: Session = Depends(get_db_session)) -> ProductRepository:
    return ProductRepository(session)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
    image_store: ImageStore = Depends(get_image_store),
) -> ProductService:
    return ProductService(
        repository,
        image_store,
        related_limit=get_config().catalog.related_limit,
    )
