"""Shared fixtures for the rental store test suite."""

import pytest
import pytest_asyncio

from rental_store.modules.accounts import AuthService
from rental_store.modules.session import SessionStore
from rental_store.store import RecordStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path}/store.db"


@pytest_asyncio.fixture
async def store(database_url):
    record_store = RecordStore(database_url)
    await record_store.init()
    yield record_store
    await record_store.close()


@pytest_asyncio.fixture
async def sessions(store):
    session_store = SessionStore(store)
    await session_store.init()
    yield session_store
    await session_store.close()


@pytest.fixture
def auth(store, sessions):
    return AuthService(store, sessions)


@pytest_asyncio.fixture(params=["file", "memory"])
async def any_store(request, database_url):
    """A store on a SQLite file, then the same tests on an in-memory store."""
    url = database_url if request.param == "file" else "sqlite+aiosqlite:///:memory:"
    record_store = RecordStore(url)
    await record_store.init()
    yield record_store
    await record_store.close()
