"""Database helpers."""

from .db_init import init_db
from .db_models import Base, ProductModel

__all__ = ["Base", "ProductModel", "init_db"]
