from __future__ import annotations

import os
from datetime import datetime, timedelta

# Settings are required at import time of app.main; tests never touch these URLs
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./clausewright-test.db")
os.environ.setdefault("DATABASE_URL_SYNC", "sqlite:///./clausewright-test.db")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from app.auth import Principal
from app.database import create_session_factory
from app.models import Base
from app.repositories.clause_repo import ClauseRepository
from app.repositories.contract_repo import ContractRepository
from app.repositories.template_repo import TemplateRepository
from app.services.contract_service import ContractService


class FakeClock:
    """Returns a fixed start time, advancing one minute per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(minutes=1)
        return now


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clausewright.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(session, clock):
    return ContractService(
        TemplateRepository(session),
        ContractRepository(session),
        ClauseRepository(session),
        clock=clock,
    )


@pytest.fixture
def alice():
    return Principal(user_id="alice")


@pytest.fixture
def bob():
    return Principal(user_id="bob")
