"""Entity package: Product."""

from .entity import ImageRef, Product, ProductCreate, ProductUpdate
from .repository import ProductFilter, ProductRepository
from .table import ProductTable

__all__ = [
    "ImageRef",
    "Product",
    "ProductCreate",
    "ProductFilter",
    "ProductRepository",
    "ProductTable",
    "ProductUpdate",
]
