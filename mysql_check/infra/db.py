"""
Database infrastructure

Each check opens its own SQLAlchemy async engine on a NullPool, so the
connection is never kept or shared between requests.
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Callable

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool

from mysql_check.core.dsn import parse_dsn
from mysql_check.core.errors import DatabaseOpenError, PingError

Connector = Callable[[str], AsyncContextManager[AsyncConnection]]


def create_engine_for(dsn: str) -> AsyncEngine:
    """Build an unpooled engine. Does not touch the network."""
    source = parse_dsn(dsn)
    connect_args = {}
    if source.connect_timeout:
        connect_args["connect_timeout"] = source.connect_timeout
    return create_async_engine(
        source.url,
        poolclass=NullPool,
        connect_args=connect_args,
    )


@asynccontextmanager
async def open_connection(dsn: str) -> AsyncIterator[AsyncConnection]:
    """
    Open a fresh connection for one check.
    The connection and its engine are released on exit, whatever happened.
    """
    try:
        engine = create_engine_for(dsn)
    except Exception as e:
        raise DatabaseOpenError(str(e)) from e

    try:
        try:
            conn = engine.connect()
            await conn.start()
        except Exception as e:
            raise PingError(str(e)) from e

        try:
            yield conn
        finally:
            await conn.close()
    finally:
        await engine.dispose()


def get_connector() -> Connector:
    """Dependency for the connection factory. Overridden in tests."""
    return open_connection
