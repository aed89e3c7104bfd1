"""Process-local image store."""

import uuid

from loguru import logger

from src.catalog.core.errors import UpstreamError

from .interface import ImageStore, ImageUpload, UploadedImage


class InMemoryImageStore(ImageStore):
    """Keeps uploaded images in a dict keyed by public id.

    Used when no image host is configured and throughout the test suite.
    ``fail_on`` holds filenames whose upload is rejected, and
    ``fail_destroy_on`` holds public ids whose deletion raises.
    """

    def __init__(
        self,
        base_url: str = "memory://images",
        fail_on: set[str] | None = None,
        fail_destroy_on: set[str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self.images: dict[str, ImageUpload] = {}
        self.fail_on = fail_on or set()
        self.fail_destroy_on = fail_destroy_on or set()
        self.upload_calls: list[str] = []
        self.destroy_calls: list[str] = []

    async def upload(self, image: ImageUpload) -> UploadedImage:
        self.upload_calls.append(image.filename)
        if image.filename in self.fail_on:
            raise UpstreamError(f"Upload rejected for {image.filename}")

        public_id = uuid.uuid4().hex
        self.images[public_id] = image
        logger.debug("Stored image {} as {}", image.filename, public_id)
        return UploadedImage(url=f"{self._base_url}/{public_id}", public_id=public_id)

    async def destroy(self, public_id: str) -> bool:
        self.destroy_calls.append(public_id)
        if public_id in self.fail_destroy_on:
            raise UpstreamError(f"Destroy failed for {public_id}")
        return self.images.pop(public_id, None) is not None
