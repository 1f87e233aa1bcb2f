"""Product records and their 3D model lifecycle."""

from .product3d_service import Model3DService
from .products_models import Product, ProductImage
from .products_repository import ProductRepository

__all__ = ["Model3DService", "Product", "ProductImage", "ProductRepository"]
