"""Cloudinary image store backed by the official Cloudinary SDK."""

import asyncio
import io

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from loguru import logger

from src.catalog.core.errors import UpstreamError
from src.catalog.runtime.config.config_data import ImageStoreConfig

from .interface import ImageStore, ImageUpload, UploadedImage


class CloudinaryImageStore(ImageStore):
    """Uploads and destroys images with ``cloudinary.uploader``.

    The SDK is blocking, so every call runs on a worker thread. Credentials
    are passed per call rather than through the SDK's global configuration.

    Configuration (in config.yaml, ``images`` section):
        cloud_name: Cloudinary cloud name
        api_key: API key
        api_secret: API secret used to sign requests
        folder: Optional folder for uploaded images
    """

    def __init__(self, config: ImageStoreConfig) -> None:
        if not config.has_credentials:
            raise ValueError("Cloudinary image store requires cloud_name, api_key and api_secret")

        self._config = config
        self._options = {
            "cloud_name": config.cloud_name,
            "api_key": config.api_key,
            "api_secret": config.api_secret,
            "timeout": config.timeout_seconds,
        }

    async def upload(self, image: ImageUpload) -> UploadedImage:
        options = {**self._options, "resource_type": "image"}
        if self._config.folder:
            options["folder"] = self._config.folder

        stream = io.BytesIO(image.content)
        stream.name = image.filename

        try:
            result = await asyncio.to_thread(cloudinary.uploader.upload, stream, **options)
        except CloudinaryError as exc:
            raise UpstreamError(f"Failed to upload {image.filename}: {exc}") from exc

        try:
            uploaded = UploadedImage(url=result["secure_url"], public_id=result["public_id"])
        except (KeyError, TypeError) as exc:
            raise UpstreamError(f"Unexpected upload response: missing {exc}") from exc

        logger.info("Uploaded {} to Cloudinary as {}", image.filename, uploaded.public_id)
        return uploaded

    async def destroy(self, public_id: str) -> bool:
        try:
            result = await asyncio.to_thread(cloudinary.uploader.destroy, public_id, **self._options)
        except CloudinaryError as exc:
            raise UpstreamError(f"Failed to destroy {public_id}: {exc}") from exc

        outcome = result.get("result") if isinstance(result, dict) else None
        if outcome != "ok":
            logger.warning("Cloudinary did not destroy {}: {}", public_id, outcome)
            return False
        return True
