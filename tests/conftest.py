# tests/conftest.py
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.clock import get_clock
from app.core.database import Base, get_db, init_db
from app.main import app
from app.queue.service import QueueService, get_queue_service
from app.queue.simulation import AbandonmentSimulator

# A Sunday morning inside service hours
NOW = datetime(2025, 10, 19, 9, 30, 0)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class ScriptedRandom:
    """Returns queued values first, then ``default`` forever."""

    def __init__(self, default: float = 0.99):
        self.default = default
        self.values: list[float] = []

    def push(self, *values: float) -> None:
        self.values.extend(values)

    def __call__(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def rng():
    # Everyone shows up unless a test pushes low values
    return ScriptedRandom(default=0.99)


@pytest.fixture
def queue(rng):
    return QueueService(simulator=AbandonmentSimulator(0.05, rng))


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def client(db, queue, clock):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_queue_service] = lambda: queue
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
