"""Image store selection from configuration."""

from loguru import logger

from src.catalog.runtime.config.config_data import ConfigData

from .cloudinary import CloudinaryImageStore
from .interface import ImageStore
from .memory import InMemoryImageStore


def build_image_store(config: ConfigData) -> ImageStore:
    """Create the image store named in the configuration.

    Without Cloudinary credentials the in-memory store is used instead, except
    in production where missing credentials are a startup failure.
    """
    images = config.images
    if images.provider == "memory":
        logger.info("Using in-memory image store")
        return InMemoryImageStore()

    if not images.has_credentials:
        if config.app.environment == "production":
            raise RuntimeError("Cloudinary credentials missing in production")
        logger.warning("Cloudinary credentials not configured; falling back to in-memory image store")
        return InMemoryImageStore()

    logger.info("Using Cloudinary image store for cloud {}", images.cloud_name)
    return CloudinaryImageStore(images)
