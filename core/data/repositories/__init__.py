"""SQLAlchemy repository implementations."""

from .order_repository_impl import SqlAlchemyOrderRepository
from .product_repository_impl import SqlAlchemyProductRepository

__all__ = ["SqlAlchemyOrderRepository", "SqlAlchemyProductRepository"]
