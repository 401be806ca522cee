import pytest

from clubfund.db import repo as repo_module
from clubfund.db.repo import Database


class FakePool:
    def __init__(self) -> None:
        self.closed = False
        self.queries = []

    async def fetch(self, query: str, *args):
        self.queries.append((query, args))
        return [{"id": 1}]

    async def fetchrow(self, query: str, *args):
        self.queries.append((query, args))
        return None

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_pool(monkeypatch):
    pool = FakePool()
    calls = []

    async def create_pool(dsn, **kwargs):
        calls.append((dsn, kwargs))
        return pool

    monkeypatch.setattr(repo_module.asyncpg, "create_pool", create_pool)
    pool.calls = calls
    return pool


@pytest.mark.asyncio
async def test_database_context_manager(fake_pool):
    async with Database("postgresql+asyncpg://club@localhost/club", min_size=2, max_size=1) as db:
        rows = await db.fetch("SELECT 1")

    assert rows == [{"id": 1}]
    assert fake_pool.closed is True
    assert fake_pool.calls == [("postgresql://club@localhost/club", {"min_size": 2, "max_size": 2})]


@pytest.mark.asyncio
async def test_database_connects_lazily(fake_pool):
    db = Database("postgresql://club@localhost/club")

    assert await db.fetchrow("SELECT * FROM sessions WHERE id = $1", 1) is None
    assert len(fake_pool.calls) == 1
    await db.close()


def test_database_from_settings(monkeypatch):
    from clubfund.config import get_settings

    monkeypatch.setenv("DATABASE_URL", "postgresql://club@db/club")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "10")
    get_settings.cache_clear()

    db = Database.from_settings()

    assert db._dsn == "postgresql://club@db/club"
    assert db._max_size == 10


def test_database_from_settings_requires_url(monkeypatch):
    from clubfund.config import get_settings

    monkeypatch.delenv("DATABASE_URL", raising=False)
    get_settings.cache_clear()

    with pytest.raises(RuntimeError):
        Database.from_settings()
