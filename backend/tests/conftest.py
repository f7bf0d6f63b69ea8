"""
Shared fixtures and stub stores.

Stub stores implement just enough of DistrictStore for the orchestrator's
source selection: a dead database, a hanging one, one that dies mid-query.
Real store behaviour is tested against in-memory SQLite.
"""
import time
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import Settings
from app.db.database import build_engine
from app.models.record import DistrictRecord
from app.services.cache import TTLCache
from app.services.fallback import sample_records
from app.services.orchestrator import QueryOrchestrator
from app.services.store import DistrictStore

FIXED_DAY = date(2026, 10, 18)
FIXED_YEAR = "2026-2027"


def make_record(district, days=40.0, state="GUJARAT", month="2026-10", year=FIXED_YEAR, **overrides):
    values = {
        "state_name": state,
        "district_name": district,
        "financial_year": year,
        "month_year": month,
        "total_job_cards": 1000,
        "total_workers": 2000,
        "active_workers": 1000,
        "women_workers": 400,
        "total_expenditure": 500000.0,
        "total_works": 100,
        "completed_works": 60,
        "ongoing_works": 30,
        "average_days_per_household": days,
        "data_source": "sample",
    }
    values.update(overrides)
    return DistrictRecord(**values)


def fixed_sample(state):
    return sample_records(state, today=FIXED_DAY)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class DownStore:
    def ping(self):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class SlowStore:
    def __init__(self, delay=0.5):
        self.delay = delay

    def ping(self):
        time.sleep(self.delay)


class SlowQueryStore:
    def __init__(self, delay=0.5):
        self.delay = delay

    def ping(self):
        return None

    def distinct_districts(self, state):
        time.sleep(self.delay)
        return ["SHOULD NOT BE SERVED"]


class DiesMidQueryStore:
    def ping(self):
        return None

    def distinct_districts(self, state):
        raise OperationalError("SELECT district_name", {}, Exception("server closed the connection"))


@pytest.fixture
def settings():
    return Settings(
        database_url="",
        cache_ttl_seconds=60,
        store_timeout_seconds=0.5,
        app_env="development",
        log_level="DEBUG",
        auto_seed=False,
        default_state="GUJARAT",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache():
    return TTLCache(ttl=60)


@pytest.fixture
def sqlite_store():
    engine = build_engine("sqlite://", timeout=1)
    store = DistrictStore(engine)
    store.create_tables()
    yield store
    engine.dispose()


@pytest.fixture
def seeded_store(sqlite_store):
    for state in ("GUJARAT", "MAHARASHTRA"):
        sqlite_store.upsert_records(fixed_sample(state))
    return sqlite_store


@pytest.fixture
def make_orchestrator(cache):
    created = []

    def factory(store=None, timeout=0.5):
        orchestrator = QueryOrchestrator(cache, store, store_timeout=timeout, fallback_source=fixed_sample)
        created.append(orchestrator)
        return orchestrator

    yield factory
    for orchestrator in created:
        orchestrator.close()
