"""Database models."""

from .base import Base
from .order_model import OrderItemModel, OrderModel
from .product_model import ProductModel

__all__ = ["Base", "OrderModel", "OrderItemModel", "ProductModel"]
