"""Repository interfaces."""

from .order_repository import OrderRepository
from .product_repository import ProductRepository

__all__ = ["OrderRepository", "ProductRepository"]
