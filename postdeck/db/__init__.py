"""Core database modules."""

from postdeck.db.database import (
    SessionMaker,
    async_session_maker,
    close_db,
    create_engine,
    create_session_maker,
    create_tables,
    engine,
    get_session_maker,
    init_db,
    transaction,
)

__all__ = [
    "SessionMaker",
    "async_session_maker",
    "close_db",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "engine",
    "get_session_maker",
    "init_db",
    "transaction",
]
