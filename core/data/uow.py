"""Unit of Work pattern for atomic transactions."""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.exceptions import ConflictError, PersistenceError
from core.domain.value_objects import ExecutionID

from .repositories.order_repository_impl import SqlAlchemyOrderRepository
from .repositories.product_repository_impl import SqlAlchemyProductRepository


logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Acquire a session from the shared pool and always release it
    2. Propagate ExecutionID across all operations
    3. Atomic commit/rollback of all repository operations
    4. Translate store failures into PersistenceError or ConflictError

    Usage:
        async with create_uow(session_factory) as uow:
            product = await uow.products.lock_for_update(product_id)
            ...
            await uow.commit()

    Leaving the block without ``commit()`` discards every change.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._execution_id: Optional[ExecutionID] = None

        # Lazy-loaded repositories
        self._order_repository: Optional[SqlAlchemyOrderRepository] = None
        self._product_repository: Optional[SqlAlchemyProductRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        self._execution_id = ExecutionID.generate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception and release the session."""
        try:
            if exc_type is not None:
                logger.warning(f"[{self._execution_id}] Transaction rolled back: {exc_val}")
            # No-op after commit; discards uncommitted work otherwise
            await self._session.rollback()
        finally:
            await self._session.close()

        if exc_type is not None and issubclass(exc_type, IntegrityError):
            logger.warning(f"[{self._execution_id}] Constraint violation: {exc_val}")
            raise ConflictError("Conflicting change rejected by the database.") from exc_val
        if exc_type is not None and issubclass(exc_type, SQLAlchemyError):
            logger.error(f"[{self._execution_id}] Database error: {exc_val}", exc_info=exc_val)
            raise PersistenceError("Database operation failed.") from exc_val

    @property
    def execution_id(self) -> ExecutionID:
        """Get current execution ID for tracing.

        Returns:
            ExecutionID value object
        """
        if self._execution_id is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._execution_id

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def orders(self) -> SqlAlchemyOrderRepository:
        """Lazy-load order repository.

        Returns:
            SqlAlchemyOrderRepository instance
        """
        if self._order_repository is None:
            self._order_repository = SqlAlchemyOrderRepository(self.session)
        return self._order_repository

    @property
    def products(self) -> SqlAlchemyProductRepository:
        """Lazy-load product (inventory ledger) repository.

        Returns:
            SqlAlchemyProductRepository instance
        """
        if self._product_repository is None:
            self._product_repository = SqlAlchemyProductRepository(self.session)
        return self._product_repository

    async def commit(self) -> None:
        """Commit all pending changes.

        Raises:
            ConflictError: If a uniqueness constraint rejects the commit
        """
        try:
            await self.session.commit()
        except IntegrityError as e:
            raise ConflictError("Conflicting change rejected by the database.") from e
        logger.info(f"[{self._execution_id}] Transaction committed")


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
