"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# Image Store
from .images import (
    CloudinaryImageStore,
    ImageStore,
    ImageUpload,
    InMemoryImageStore,
    UploadedImage,
    build_image_store,
)

# Product Service
from .product_service import ProductPage, ProductService
from .slug import slugify

__all__ = [
    # Database Service
    "DbSessionService",
    # Image Store
    "CloudinaryImageStore",
    "ImageStore",
    "ImageUpload",
    "InMemoryImageStore",
    "UploadedImage",
    "build_image_store",
    # Product Service
    "ProductPage",
    "ProductService",
    "slugify",
]
