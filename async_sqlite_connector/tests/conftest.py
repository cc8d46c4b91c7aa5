# tests/conftest.py
import pytest
import pytest_asyncio
from ..connector import Sqlite


@pytest_asyncio.fixture
async def connector():
    """An open connector on a throwaway path; closed after the test."""
    conn = await Sqlite.new("file:test.db")
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def file_connector(tmp_path):
    """A connector whose file lives in the test's temporary directory."""
    conn = await Sqlite.new(f"file:{tmp_path / 'test.db'}?db_name=test")
    yield conn
    await conn.close()


@pytest.fixture
def user_table_sql():
    return """
    CREATE TABLE USER (
        ID INT PRIMARY KEY     NOT NULL,
        NAME           TEXT    NOT NULL,
        AGE            INT     NOT NULL,
        SALARY         REAL
    );
    """
