"""Test fixtures and configuration."""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from enumtype.config import reset_settings
from enumtype.core import EnumType
from enumtype.definitions import reset_registry


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Point the registry at an empty location and drop cached state."""
    monkeypatch.setenv("ENUMTYPE_DEFINITIONS_PATH", str(tmp_path / "enums.yaml"))
    reset_settings()
    reset_registry()
    yield
    reset_settings()
    reset_registry()


@pytest.fixture
def toast_status() -> EnumType:
    return EnumType("ToastStatus", ["bread", "toasting", "toast", "burnt"])


@pytest.fixture
def bitfield() -> EnumType:
    return EnumType("BitField", {"READ": 1, "WRITE": 2, "EXECUTE": 4})


@pytest.fixture
def metadata() -> MetaData:
    """Tables created for ``db_session``; modules with ORM models override this."""
    return MetaData()


@pytest_asyncio.fixture
async def db_session(metadata: MetaData) -> AsyncGenerator[AsyncSession, None]:
    """Provide an in-memory SQLite session for tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()
