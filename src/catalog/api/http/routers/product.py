"""Product API router.

Every response is a JSON envelope with a ``success`` flag; errors raised by
the service are turned into envelopes by the application's exception handlers.
"""

from typing import Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from starlette.datastructures import UploadFile as ReceivedFile

from src.catalog.api.http.deps import get_product_service
from src.catalog.core.errors import CatalogValidationError
from src.catalog.core.services import ImageUpload, ProductPage, ProductService
from src.catalog.entities.service.product import Product, ProductCreate, ProductUpdate
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/api/product", tags=["product"])

# Larger values overflow the database integer binding for offset/limit
MAX_PAGINATION_VALUE = 1_000_000_000


def _dump(product: Product) -> dict[str, Any]:
    return product.model_dump(mode="json", by_alias=True)


def _positive_int(value: str | None, default: int) -> int:
    """Parse a pagination value, falling back to the default when unusable."""
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if 1 <= parsed <= MAX_PAGINATION_VALUE else default


def _pagination(page: str | None, limit: str | None) -> tuple[int, int]:
    catalog = get_config().catalog
    return (
        _positive_int(page, catalog.default_page),
        _positive_int(limit, catalog.default_page_size),
    )


async def _read_uploads(parts: list[UploadFile | str] | None) -> list[ImageUpload]:
    # A file input left empty arrives as a blank string or a nameless part
    files = [part for part in parts or [] if isinstance(part, ReceivedFile) and part.filename]
    if not files:
        return []
    max_files = get_config().catalog.max_upload_files
    if len(files) > max_files:
        raise CatalogValidationError(f"At most {max_files} images may be uploaded")

    uploads = []
    for upload in files:
        uploads.append(
            ImageUpload(
                filename=upload.filename,
                content=await upload.read(),
                content_type=upload.content_type or "application/octet-stream",
            )
        )
    return uploads


def _page_body(result: ProductPage) -> dict[str, Any]:
    return {
        "success": True,
        "currentPage": result.current_page,
        "totalPages": result.total_pages,
        "products": [_dump(product) for product in result.products],
    }


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_product(
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: float | None = Form(None),
    quantity: int | None = Form(None),
    category: str | None = Form(None),
    images: list[UploadFile | str] | None = File(None),
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """Create a product, uploading up to five images."""
    data = ProductCreate(
        name=name,
        description=description,
        price=price,
        quantity=quantity,
        category=category,
    )
    product = await service.create_product(data, await _read_uploads(images))
    return {
        "success": True,
        "message": "Product created successfully",
        "product": _dump(product),
    }


@router.get("/all")
async def get_all_products(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """List products one page at a time."""
    page_number, page_size = _pagination(page, limit)
    result = await service.get_all_products(page_number, page_size)
    body = _page_body(result)
    body["productCount"] = result.total
    return body


@router.get("/product/{product_id}")
async def get_one_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    product = await service.get_one_product(product_id)
    return {
        "success": True,
        "message": "Product fetched successfully",
        "product": _dump(product),
    }


@router.get("/slug/{slug}")
async def get_product_by_slug(
    slug: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    product = await service.get_product_by_slug(slug)
    return {
        "success": True,
        "message": "Product fetched successfully",
        "product": _dump(product),
    }


@router.delete("/delete/{product_id}")
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """Delete a product. Unknown ids are not an error."""
    deleted = await service.delete_product(product_id)
    return {
        "success": True,
        "message": "Product deleted successfully",
        "result": {"deletedCount": deleted},
    }


@router.put("/update/{product_id}")
async def update_product(
    product_id: str,
    name: str | None = Form(None),
    description: str | None = Form(None),
    price: float | None = Form(None),
    category: str | None = Form(None),
    quantity: int | None = Form(None),
    images: list[UploadFile | str] | None = File(None),
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """Update the given fields and optionally replace the product's images."""
    data = ProductUpdate(
        name=name,
        description=description,
        price=price,
        category=category,
        quantity=quantity,
    )
    product = await service.update_product(product_id, data, await _read_uploads(images))
    return {
        "success": True,
        "message": "Product updated successfully",
        "product": _dump(product),
    }


@router.post("/search")
async def search_product(
    term: str | None = Query(None),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """Search available products by name or description."""
    page_number, page_size = _pagination(page, limit)
    result = await service.search_product(term, page_number, page_size)
    body = _page_body(result)
    body["productsFound"] = result.total
    return body


@router.get("/related/{product_id}")
async def related_products(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    products = await service.related_products(product_id)
    return {"success": True, "relatedProducts": [_dump(product) for product in products]}
