"""
Общие фикстуры: движок на in-memory заглушках и in-memory SQLite
для тестов репозиториев.
"""
from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import activebreak.models  # noqa: F401
from activebreak.models.base import Base
from activebreak.reminders.dispatcher import ReminderDispatcher
from activebreak.reminders.domain import EngineTuning
from activebreak.reminders.evaluator import RuleEvaluator

from tests.fakes import (
    FakeActivityStore,
    FakeCatalog,
    FakeRuleStore,
    FakeSink,
    FakeTriggerLog,
)


@pytest.fixture
def activities():
    return FakeActivityStore()


@pytest.fixture
def trigger_log():
    return FakeTriggerLog()


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def catalog():
    return FakeCatalog({3: "Squats"})


@pytest.fixture
def evaluator(activities, trigger_log):
    return RuleEvaluator(activities, trigger_log, EngineTuning())


@pytest.fixture
def make_dispatcher(activities, trigger_log, catalog, sink):
    def _make(rules, *, rule_store=None, tuning=None, **kwargs):
        return ReminderDispatcher(
            rules=rule_store or FakeRuleStore(rules),
            evaluator=RuleEvaluator(activities, trigger_log, tuning or EngineTuning()),
            trigger_log=trigger_log,
            catalog=catalog,
            sink=sink,
            **kwargs,
        )
    return _make


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(db_engine):
    maker = async_sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as s:
        yield s
