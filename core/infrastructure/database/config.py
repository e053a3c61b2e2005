"""
Database configuration.

Owns the process-wide engine (connection pool) and session factory.
The engine is built once, sessions are handed out per unit of work.
"""
from typing import Any, Dict, Optional
import logging

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from core.settings import DatabaseSettings, get_app_settings


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _engine_kwargs(settings: DatabaseSettings) -> Dict[str, Any]:
    """Pool and connect arguments per backend."""
    url = make_url(settings.database_url)
    kwargs: Dict[str, Any] = {"echo": settings.echo_sql}

    if url.get_backend_name() == "sqlite":
        # Seconds the driver waits on a locked database before giving up
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.lock_timeout_ms / 1000,
        }
        if _is_memory_sqlite(url):
            kwargs["poolclass"] = StaticPool
            return kwargs
    elif url.get_backend_name() == "postgresql":
        kwargs["connect_args"] = {
            "server_settings": {
                "lock_timeout": str(settings.lock_timeout_ms),
                "statement_timeout": str(settings.statement_timeout_ms),
            }
        }

    kwargs.update(
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
        pool_pre_ping=True,  # Test connections before using
    )
    return kwargs


def _serialize_sqlite_writers(engine: AsyncEngine) -> None:
    """
    Open every SQLite transaction with ``BEGIN IMMEDIATE``.

    SQLite ignores ``FOR UPDATE``; taking the write lock at BEGIN makes
    concurrent units of work queue up the way row locks do elsewhere.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings (defaults to application settings)

    Returns:
        Configured async engine
    """
    settings = settings or get_app_settings().database
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    engine = create_async_engine(settings.database_url, **_engine_kwargs(settings))

    if url.get_backend_name() == "sqlite":
        _serialize_sqlite_writers(engine)

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to an engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Global engine instance
engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.

    Returns:
        Global async engine
    """
    global engine

    if engine is None:
        engine = create_engine()

    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================

def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get session factory bound to the global engine.

    Returns:
        Session factory for creating sessions
    """
    global _session_factory

    if _session_factory is None:
        _session_factory = create_session_factory(get_engine())

    return _session_factory


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(target: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database...")

    target = target or get_engine()

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database initialized successfully")


async def ping_database(session_factory: async_sessionmaker[AsyncSession]) -> bool:
    """Check that a pooled connection answers ``SELECT 1``."""
    async with session_factory() as session:
        await session.execute(text("SELECT 1"))
    return True


async def close_database() -> None:
    """Close database connections."""
    global engine, _session_factory

    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        engine = None
        _session_factory = None
        logger.info("✅ Database connections closed")
