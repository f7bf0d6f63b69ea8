# backend/app/services/orchestrator.py
"""
Decides, per query, where the answer comes from:

    cache hit                      -> "cache"
    store reachable (ping + query) -> "database"
    store down / timed out         -> "fallback" (deterministic sample data)

A NotFound raised while the store is reachable is final and is never papered
over with sample data. Only the state list, district list and state overview
treat "no stored rows for this state" as a reason to fall back.
"""
import logging
from datetime import date
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout

from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeout

from app.core.errors import NotFound, SourceUnavailable
from app.services import aggregation, fallback, locator
from app.services.reference import SUPPORTED_STATES, district_locations, normalize_name
from app.utils import financial_year_for

logger = logging.getLogger("orchestrator")

SOURCE_CACHE = "cache"
SOURCE_DATABASE = "database"
SOURCE_FALLBACK = "fallback"
SOURCE_STATIC = "static"

HISTORY_MONTHS = 6
TOP_PERFORMERS = 5

_UNREACHABLE = (OperationalError, InterfaceError, PoolTimeout, OSError)


def cache_key(query_type, *parts):
    return ":".join([query_type] + [normalize_name(str(p)) for p in parts])


def current_financial_year():
    return financial_year_for(date.today())


class QueryOrchestrator:
    def __init__(self, cache, store=None, store_timeout=5.0, fallback_source=None, max_workers=8):
        self.cache = cache
        self.store = store
        self.store_timeout = store_timeout
        self.fallback_source = fallback_source or fallback.sample_records
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="store")

    def close(self):
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ---------- SOURCE SELECTION ----------
    def _bounded(self, fn, *args):
        future = self._executor.submit(fn, *args)
        try:
            return future.result(timeout=self.store_timeout)
        except FutureTimeout:
            future.cancel()
            raise SourceUnavailable(f"store call exceeded {self.store_timeout}s") from None
        except _UNREACHABLE as exc:
            raise SourceUnavailable(str(exc)) from exc

    def _query_store(self, from_store):
        if self.store is None:
            raise SourceUnavailable("no persistent store configured")
        self._bounded(self.store.ping)
        return self._bounded(from_store)

    def _resolve(self, key, from_store, from_fallback, fallback_on_empty=False):
        cached = self.cache.get(key)
        if cached is not None:
            return {"source": SOURCE_CACHE, "data": cached}

        try:
            data = self._query_store(from_store)
            source = SOURCE_DATABASE
            if fallback_on_empty and not data:
                logger.info("No stored data for %s, serving fallback", key)
                data, source = from_fallback(), SOURCE_FALLBACK
        except SourceUnavailable as exc:
            logger.warning("Store unavailable for %s (%s), serving fallback", key, exc)
            data, source = from_fallback(), SOURCE_FALLBACK

        self.cache.set(key, data)
        return {"source": source, "data": data}

    # ---------- QUERIES ----------
    def list_states(self):
        return self._resolve(
            cache_key("states"),
            lambda: self.store.distinct_states(),
            lambda: list(SUPPORTED_STATES),
            fallback_on_empty=True,
        )

    def list_districts(self, state):
        state = normalize_name(state)

        def from_fallback():
            # dict.fromkeys keeps first-seen order while dropping repeats
            return list(dict.fromkeys(r.district_name for r in self.fallback_source(state)))

        return self._resolve(
            cache_key("districts", state),
            lambda: self.store.distinct_districts(state),
            from_fallback,
            fallback_on_empty=True,
        )

    def district_detail(self, state, district, year=None):
        state, district = normalize_name(state), normalize_name(district)
        year = year or current_financial_year()

        def from_store():
            current = self.store.find_current_record(state, district, year)
            historical = self.store.find_recent_records(state, district, HISTORY_MONTHS)
            if current is None and not historical:
                raise NotFound(f"No data for {district} in {state}")
            average = self.store.aggregate_state_average(state, year)
            return _detail_bundle(current, historical, average)

        def from_fallback():
            records = self.fallback_source(state)
            matching = [r for r in records if r.district_name == district]
            if not matching:
                raise NotFound(f"No data for {district} in {state}")
            return _detail_bundle(matching[0], matching[-HISTORY_MONTHS:], aggregation.state_average(records))

        return self._resolve(cache_key("district", state, district, year), from_store, from_fallback)

    def district_summary(self, state, district, year=None):
        state, district = normalize_name(state), normalize_name(district)
        year = year or current_financial_year()

        def from_store():
            record = self.store.find_current_record(state, district, year)
            if record is None:
                raise NotFound("District not found")
            return aggregation.district_summary(record)

        def from_fallback():
            for record in self.fallback_source(state):
                if record.district_name == district:
                    return aggregation.district_summary(record)
            raise NotFound("District not found")

        return self._resolve(cache_key("summary", state, district, year), from_store, from_fallback)

    def state_overview(self, state, year=None):
        state = normalize_name(state)
        year = year or current_financial_year()

        def from_store():
            overview = self.store.aggregate_state_overview(state, year)
            if overview is None:
                return None
            top = self.store.top_districts_by_days(state, year, TOP_PERFORMERS)
            return {"overview": overview, "top_performers": top}

        def from_fallback():
            records = self.fallback_source(state)
            return {
                "overview": aggregation.state_overview(records),
                "top_performers": aggregation.top_performers(records, TOP_PERFORMERS),
            }

        return self._resolve(
            cache_key("overview", state, year), from_store, from_fallback, fallback_on_empty=True
        )

    def nearest_district(self, latitude, longitude):
        latitude, longitude = locator.validate_coordinates(latitude, longitude)
        key = cache_key("nearest", repr(latitude), repr(longitude))

        cached = self.cache.get(key)
        if cached is not None:
            return {"source": SOURCE_CACHE, "data": cached}

        data = locator.locate(latitude, longitude)
        self.cache.set(key, data)
        return {"source": SOURCE_STATIC, "data": data}

    def districts_map(self):
        return {"source": SOURCE_STATIC, "data": district_locations()}


def _detail_bundle(current, historical, average):
    return {
        "current": current.as_payload() if current else None,
        "historical": [r.as_payload() for r in historical],
        "state_average": average,
        "comparison": aggregation.district_vs_state(current, average) if current and average else None,
    }
