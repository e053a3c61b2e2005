"""SQLAlchemy implementation of the inventory ledger."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.product import Product
from core.domain.repositories.product_repository import ProductRepository

from ..locking import lock_row_for_update
from ..mappers import ProductMapper
from ..models.product_model import ProductModel


class SqlAlchemyProductRepository(ProductRepository):
    """Row-locked stock access on the products table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lock_for_update(self, product_id: int) -> Optional[Product]:
        model = await lock_row_for_update(self._session, ProductModel, product_id)
        if model is None:
            return None
        return ProductMapper.to_domain(model)

    async def save_stock(self, product: Product) -> None:
        # Already in the identity map: locked just before by lock_for_update
        model = await self._session.get(ProductModel, product.id)
        model.stock_quantity = product.stock_quantity
        await self._session.flush()
