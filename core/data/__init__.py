"""Data layer - infrastructure persistence and mapping."""

from .locking import lock_row_for_update
from .mappers import OrderItemMapper, OrderMapper, ProductMapper
from .models import Base, OrderItemModel, OrderModel, ProductModel
from .repositories import SqlAlchemyOrderRepository, SqlAlchemyProductRepository
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "lock_row_for_update",
    "OrderItemMapper",
    "OrderItemModel",
    "OrderMapper",
    "OrderModel",
    "ProductMapper",
    "ProductModel",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "UnitOfWork",
]
