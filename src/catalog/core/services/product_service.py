"""Product service: orchestrates validation, slugs, images and persistence.

Create and update are the only multi-step operations. Images are uploaded
(and, on update, previously stored images destroyed) concurrently, one task
per file; a failing task never aborts the others or the request. Nothing
compensates for remote changes when the database write afterwards fails.

Repository calls block, so they run on a worker thread and a slow query only
holds up the request that issued it.
"""

import asyncio
import math
from dataclasses import dataclass, field

from loguru import logger

from src.catalog.core.errors import CatalogValidationError, NotFoundError
from src.catalog.core.services.images import ImageStore, ImageUpload
from src.catalog.core.services.slug import slugify
from src.catalog.entities.service.product import (
    ImageRef,
    Product,
    ProductCreate,
    ProductFilter,
    ProductRepository,
    ProductUpdate,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
RELATED_LIMIT = 10


@dataclass
class ProductPage:
    """One page of a product listing."""

    products: list[Product] = field(default_factory=list)
    current_page: int = DEFAULT_PAGE
    total_pages: int = 0
    total: int = 0


class ProductService:
    """Business operations on products."""

    def __init__(
        self,
        repository: ProductRepository,
        image_store: ImageStore,
        related_limit: int = RELATED_LIMIT,
    ) -> None:
        self._repository = repository
        self._image_store = image_store
        self._related_limit = related_limit

    async def _db(self, operation, *args, **kwargs):
        return await asyncio.to_thread(operation, *args, **kwargs)

    async def _upload_one(self, image: ImageUpload) -> ImageRef:
        try:
            uploaded = await self._image_store.upload(image)
        except Exception as exc:
            logger.opt(exception=exc).error("Error uploading image {}", image.filename)
            return ImageRef.failed()
        return ImageRef(url=uploaded.url, image_public_id=uploaded.public_id)

    async def _upload_all(self, images: list[ImageUpload]) -> list[ImageRef]:
        """Upload every image concurrently; results keep the input order."""
        if not images:
            return []
        return list(await asyncio.gather(*(self._upload_one(image) for image in images)))

    async def _destroy_one(self, image: ImageRef) -> None:
        if not image.image_public_id:
            logger.warning("Skipping deletion of image without a public id: {}", image.error)
            return
        try:
            await self._image_store.destroy(image.image_public_id)
        except Exception as exc:
            logger.opt(exception=exc).error(
                "Error deleting image {} from image store", image.image_public_id
            )

    async def _destroy_all(self, images: list[ImageRef]) -> None:
        await asyncio.gather(*(self._destroy_one(image) for image in images))

    async def create_product(
        self, data: ProductCreate, images: list[ImageUpload] | None = None
    ) -> Product:
        """Validate, upload images and persist a new product."""
        if data.missing_fields():
            raise CatalogValidationError("All fields are required")

        slug = slugify(data.name)
        uploaded = await self._upload_all(images or [])

        product = Product(
            name=data.name,
            slug=slug,
            description=data.description,
            price=data.price,
            quantity=data.quantity,
            category=data.category,
            images=uploaded,
        )
        created = await self._db(self._repository.create, product)
        logger.info("Created product {} ({}) with {} image(s)", created.id, created.slug, len(uploaded))
        return created

    async def update_product(
        self,
        product_id: str,
        data: ProductUpdate,
        images: list[ImageUpload] | None = None,
    ) -> Product:
        """Apply a partial update and, when files are given, replace the images.

        Existing images are destroyed remotely whenever the product has any,
        even if no replacement files were sent; in that case the stored list
        is kept as it was.
        """
        product = await self._db(self._repository.get, product_id)
        if product is None:
            raise NotFoundError("Product not found")

        changes = data.present_fields()
        new_name = changes.get("name")
        if new_name is not None and new_name != product.name:
            changes["slug"] = slugify(new_name)
        product = product.model_copy(update=changes)

        if product.images:
            await self._destroy_all(product.images)

        uploaded = await self._upload_all(images or [])
        if uploaded:
            product.images = uploaded

        saved = await self._db(self._repository.save, product)
        logger.info("Updated product {} fields={}", saved.id, sorted(changes))
        return saved

    async def get_one_product(self, product_id: str) -> Product:
        product = await self._db(self._repository.get, product_id)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    async def get_product_by_slug(self, slug: str) -> Product:
        product = await self._db(self._repository.get_by_slug, slug)
        if product is None:
            raise NotFoundError("Product not found")
        return product

    def _page(
        self, product_filter: ProductFilter | None, page: int, limit: int
    ) -> ProductPage:
        skip = (page - 1) * limit
        products = self._repository.find(product_filter, skip=skip, limit=limit)
        total = self._repository.count(product_filter)
        return ProductPage(
            products=products,
            current_page=page,
            total_pages=math.ceil(total / limit),
            total=total,
        )

    async def get_all_products(
        self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
    ) -> ProductPage:
        return await self._db(self._page, None, page, limit)

    async def related_products(self, product_id: str) -> list[Product]:
        """Products whose name or description resembles the given product's."""
        anchor = await self._db(self._repository.get, product_id)
        if anchor is None:
            raise NotFoundError("Product not found")

        product_filter = ProductFilter(
            name_contains=anchor.name,
            description_contains=anchor.description,
            exclude_id=anchor.id,
        )
        return await self._db(self._repository.find, product_filter, limit=self._related_limit)

    async def search_product(
        self,
        term: str | None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> ProductPage:
        """Available products whose name or description contains ``term``."""
        if not term or not term.strip():
            raise CatalogValidationError("Search term is required")
        return await self._db(
            self._page, ProductFilter.text(term, is_available=True), page, limit
        )

    async def delete_product(self, product_id: str) -> int:
        """Delete a product; stored images are left in the image store."""
        deleted = await self._db(self._repository.delete, product_id)
        if deleted:
            logger.info("Deleted product {}", product_id)
        else:
            logger.info("Delete requested for unknown product {}", product_id)
        return deleted
