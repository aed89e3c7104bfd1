"""Image store clients."""

from .cloudinary import CloudinaryImageStore
from .factory import build_image_store
from .interface import ImageStore, ImageUpload, UploadedImage
from .memory import InMemoryImageStore

__all__ = [
    "CloudinaryImageStore",
    "ImageStore",
    "ImageUpload",
    "InMemoryImageStore",
    "UploadedImage",
    "build_image_store",
]
