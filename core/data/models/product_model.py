"""SQLAlchemy ORM model for catalog products."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Text

from .base import Base, utcnow


class ProductModel(Base):
    """
    SQLAlchemy ORM model for products table.

    Catalog management owns this table. Ordering reads ``price`` and
    locks and decrements ``stock_quantity``.
    """

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
    )

    def __repr__(self):
        return f"<ProductModel(id={self.id}, price={self.price}, stock={self.stock_quantity})>"
