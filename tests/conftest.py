"""
Conftest
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from mysql_check.core.config import Settings
from mysql_check.core.context import AppContext, build_context
from mysql_check.infra.db import get_connector
from mysql_check.main import create_app
from mysql_check.services.check_service import PING_QUERY


class FakeResult:
    def __init__(self, value):
        self.value = value

    def scalar_one(self):
        if isinstance(self.value, Exception):
            raise self.value
        return self.value


class FakeConnection:
    """Answers the probe's two statements without a server"""

    def __init__(self):
        self.read_only = 0
        self.ping_error: Optional[Exception] = None
        self.query_error: Optional[Exception] = None
        self.statements = []

    async def execute(self, statement):
        sql = str(statement)
        self.statements.append(sql)
        if sql == PING_QUERY:
            if self.ping_error:
                raise self.ping_error
            return FakeResult(1)
        if self.query_error:
            raise self.query_error
        return FakeResult(self.read_only)


class FakeDatabase:
    """Stands in for open_connection(); records opens and releases"""

    def __init__(self):
        self.connection = FakeConnection()
        self.open_error: Optional[Exception] = None
        self.opened = []
        self.released = 0

    @asynccontextmanager
    async def connect(self, dsn: str):
        self.opened.append(dsn)
        if self.open_error:
            raise self.open_error
        try:
            yield self.connection
        finally:
            self.released += 1


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ADDRESS", "TIMEOUT", "USER_PASSWORD"):
        monkeypatch.delenv(f"MYSQL_CHECK_MYSQL_{name}", raising=False)
    monkeypatch.delenv("MYSQL_CHECK_HTTP_ADDRESS", raising=False)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mysql_address="db:3306",
        mysql_timeout="5",
        mysql_user_password="root:secret",
        http_address=":8080",
    )


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


def make_context(settings: Settings, debug: bool) -> AppContext:
    return build_context(settings, debug=debug, info_log=MagicMock(), error_log=MagicMock())


@pytest.fixture
def context(settings) -> AppContext:
    return make_context(settings, debug=False)


@pytest.fixture
def debug_context(settings) -> AppContext:
    return make_context(settings, debug=True)


@asynccontextmanager
async def make_client(context: AppContext, fake_db: FakeDatabase):
    app = create_app(context)
    # Override dependency
    app.dependency_overrides[get_connector] = lambda: fake_db.connect

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def client_factory():
    return make_client


@pytest_asyncio.fixture
async def client(context, fake_db) -> AsyncGenerator[AsyncClient, None]:
    async with make_client(context, fake_db) as c:
        yield c


@pytest_asyncio.fixture
async def debug_client(debug_context, fake_db) -> AsyncGenerator[AsyncClient, None]:
    async with make_client(debug_context, fake_db) as c:
        yield c
