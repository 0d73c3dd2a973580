"""
Asynchronous Database Utilities Module

SQLAlchemy asyncio engine, session factory and the transaction manager used by
the authentication flows.

A flow wraps its persistence writes in ``SqlTransactionManager.run(fn)``: the
session opened there is published through a context variable, so every
repository call made inside ``fn`` joins the same transaction. Repository calls
made outside ``run`` get a short-lived session of their own that commits on
exit.

**Security Note**: Ensure that the database connection URL (DATABASE_URL) is configured for SSL/TLS when
connecting over untrusted networks. Avoid logging connection details.
"""

from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Awaitable, Callable, Optional, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel

from src.domain.interfaces.services import ITransactionManager

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_current_session: ContextVar[Optional[AsyncSession]] = ContextVar("phonegate_db_session", default=None)


def create_engine(database_url: str, echo: bool = False, pool_size: int = 5, max_overflow: int = 10) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=echo,
        future=True,
        pool_pre_ping=True,
        pool_size=pool_size,
        max_overflow=max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)  # type: ignore[call-overload]


class Database:
    """Owns the engine and hands out sessions bound to the current transaction."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield the session of the enclosing ``run`` or a fresh autocommitting one."""
        current = _current_session.get()
        if current is not None:
            yield current
            return

        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                logger.error("Async database session rollback due to error")
                raise

    async def create_all(self) -> None:
        """Create the tables (development and test setups; production schemas are provisioned separately)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Async database tables created")

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.debug("Async database engine disposed")


class SqlTransactionManager(ITransactionManager):
    """``withTransaction(fn)`` over one ``AsyncSession``.

    Nested calls join the outer transaction instead of opening a second one.
    """

    def __init__(self, database: Database):
        self._database = database

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        if _current_session.get() is not None:
            return await fn()

        async with self._database.session_factory() as session:
            token = _current_session.set(session)
            try:
                result = await fn()
                await session.commit()
                return result
            except Exception:
                await session.rollback()
                logger.warning("Transaction rolled back")
                raise
            finally:
                _current_session.reset(token)


class InMemoryTransactionManager(ITransactionManager):
    """Runs ``fn`` as is; the in-memory repositories apply each write immediately."""

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        return await fn()
