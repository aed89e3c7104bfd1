"""Image store contract.

The catalog only needs two operations from an image host: upload a file and
get back a public URL plus a handle, and destroy a previously uploaded file
by that handle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageUpload:
    """An image file received with a request."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass(frozen=True)
class UploadedImage:
    """Location and handle of an image stored remotely."""

    url: str
    public_id: str


class ImageStore(ABC):
    """Abstract interface for the external image hosting service.

    Implementations:
        - CloudinaryImageStore: Cloudinary through its Python SDK
        - InMemoryImageStore: process-local storage for development and tests
    """

    @abstractmethod
    async def upload(self, image: ImageUpload) -> UploadedImage:
        """Upload one image.

        Raises:
            UpstreamError: If the image host rejects or fails the upload
        """

    @abstractmethod
    async def destroy(self, public_id: str) -> bool:
        """Delete one image by its public id.

        Returns:
            True if the host reports the image as deleted, False otherwise

        Raises:
            UpstreamError: If the image host cannot be reached
        """

    async def aclose(self) -> None:
        """Release any resources held by the store."""
