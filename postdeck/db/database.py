"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from postdeck.configs import file_logger, settings
from postdeck.errors.base import BaseAppError
from postdeck.errors.database import DatabaseError

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000

type SessionMaker = async_sessionmaker[SQLModelAsyncSession]


def is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def engine_kwargs(url: str) -> dict[str, Any]:
    """
    Build dialect-specific engine options.

    asyncpg gets statement/lock timeouts; SQLite gets a busy timeout so
    concurrent writers wait for the lock instead of failing.
    """
    if is_sqlite(url):
        return {"connect_args": {"timeout": STATEMENT_TIMEOUT_MS / 1000}}

    return {
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {
            "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
            "server_settings": {
                "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                "lock_timeout": str(STATEMENT_TIMEOUT_MS),
            },
        },
    }


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite leaves foreign key enforcement off unless asked per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: Any, connection_record: object) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def create_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine configured for the given database URL."""
    new_engine = create_async_engine(url, echo=echo, **engine_kwargs(url))
    if is_sqlite(url):
        _enable_sqlite_foreign_keys(new_engine)
    if settings.DEBUG:
        _configure_engine_events(new_engine)
    return new_engine


def create_session_maker(bind: AsyncEngine) -> SessionMaker:
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine: AsyncEngine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

async_session_maker: SessionMaker = create_session_maker(engine)


def get_session_maker() -> SessionMaker:
    """
    Dependency returning the application's session factory.

    Services open one transaction per operation from this factory, so the
    factory rather than a session is what gets injected.
    """
    return async_session_maker


@asynccontextmanager
async def transaction(
    session_maker: SessionMaker | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit and rolls back on any exception. Database
    driver errors are re-raised as `DatabaseError`; application errors
    propagate unchanged.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(PostDB(title="Post A", content="..."))
        ```
    """
    maker = session_maker or async_session_maker
    async with maker() as session:
        try:
            yield session
            await session.commit()
        except BaseAppError:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Transaction error")
            raise DatabaseError(detail="Database operation failed") from e
        except Exception:
            await session.rollback()
            raise


async def create_tables(bind: AsyncEngine) -> None:
    """Create all tables registered on the SQLModel metadata."""
    # Models must be imported so they register on the metadata
    from postdeck.models import CategoryDB, PostCategoryDB, PostDB, ProfileDB  # noqa: F401, PLC0415

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def init_db() -> None:
    """
    Initialize database tables.

    Note:
        This is a simple initialization for development.
        For production, use the Alembic migrations.
    """
    await create_tables(engine)
    logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Close database connections on application shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
