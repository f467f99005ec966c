"""
Health check service

A check is a fixed sequence of stages run against one fresh connection.
Each stage raises a HealthCheckError on failure, which ends the check.
"""

from typing import Awaitable, Callable, Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from mysql_check.core.context import AppContext
from mysql_check.core.errors import PingError, QueryError, ReadOnlyError
from mysql_check.infra.db import Connector

PING_QUERY = "SELECT 1"
READ_ONLY_QUERY = "SELECT @@global.read_only"

Stage = Callable[[AsyncConnection], Awaitable[None]]


async def ping(conn: AsyncConnection) -> None:
    """Round-trip a trivial statement to make sure the server answers"""
    try:
        await conn.execute(text(PING_QUERY))
    except Exception as e:
        raise PingError(str(e)) from e


async def query_read_only(conn: AsyncConnection) -> None:
    """Fail when the server has @@global.read_only set"""
    try:
        result = await conn.execute(text(READ_ONLY_QUERY))
        read_only = int(result.scalar_one())
    except Exception as e:
        raise QueryError(str(e)) from e

    if read_only != 0:
        raise ReadOnlyError()


CHECK_STAGES: Sequence[Stage] = (ping, query_read_only)


async def run_check(
    context: AppContext,
    connector: Connector,
    stages: Sequence[Stage] = CHECK_STAGES,
) -> None:
    """
    Run every stage in order on a new connection.
    Returns normally only when the node is reachable and writable.
    """
    async with connector(context.dsn) as conn:
        for stage in stages:
            await stage(conn)

    if context.debug:
        context.info_log.info("check is ok")
