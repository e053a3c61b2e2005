"""Pessimistic row locking."""

from typing import Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.value_objects import is_row_id

ModelT = TypeVar("ModelT")


async def lock_row_for_update(
    session: AsyncSession, model: Type[ModelT], row_id: int
) -> Optional[ModelT]:
    """Load one row by primary key under an exclusive, transaction-scoped lock.

    Renders ``SELECT ... FOR UPDATE`` where the backend supports it. The
    lock is held until the surrounding transaction commits or rolls back;
    concurrent callers for the same row wait. SQLite has no row locks:
    there the engine opens every transaction with ``BEGIN IMMEDIATE``
    so writers are serialized for the whole database instead.

    Args:
        session: Session bound to the current unit of work
        model: ORM model class with an ``id`` primary key
        row_id: Primary key value

    Returns:
        Model instance if found, None otherwise (also for ids outside
        the key range, which no row can carry)
    """
    if not is_row_id(row_id):
        return None

    result = await session.execute(
        select(model)
        .where(model.id == row_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()
