# backend/app/services/seeder.py
import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.db.database import build_engine
from app.services.fallback import sample_records
from app.services.reference import SUPPORTED_STATES
from app.services.store import DistrictStore
from app.utils import financial_year_for

logger = logging.getLogger("seed")

RUPEES_PER_CRORE = 10_000_000


def seed_states(store, states=None, today=None):
    """Upsert the sample dataset for each state. Re-running it overwrites, never duplicates."""
    total = 0
    for state in states or SUPPORTED_STATES:
        records = sample_records(state, today=today)
        written = store.upsert_records(records)
        logger.info("🌱 %s: %d districts", state, written)
        total += written
    return total


def seed_summary(store, states=None, today=None):
    """Per-state districts, workers and expenditure for the seeded financial year."""
    year = financial_year_for(today or date.today())
    summary = []
    for state in states or SUPPORTED_STATES:
        overview = store.aggregate_state_overview(state, year)
        if overview is None:
            continue
        summary.append({
            "state": state,
            "districts": overview["total_districts"],
            "total_workers": overview["total_workers"],
            "total_expenditure": overview["total_expenditure"],
        })
    return summary


def log_summary(summary):
    logger.info("📈 Summary by state:")
    for row in summary:
        logger.info(
            "   %s: %d districts, %s workers, ₹%.2fCr expenditure",
            row["state"], row["districts"], f"{row['total_workers']:,}",
            row["total_expenditure"] / RUPEES_PER_CRORE,
        )


def seed_if_empty(store):
    if store.count() > 0:
        logger.info("📊 Store already has data, skipping seed")
        return 0
    logger.info("📊 Store is empty. Starting auto-seed...")
    total = seed_states(store)
    logger.info("🎉 Auto-seed completed: %d records", total)
    log_summary(seed_summary(store))
    return total


def run_seed_once():
    if not settings.database_url:
        logger.warning("⚠️ DATABASE_URL is not set, nothing to seed")
        return 0

    engine = build_engine(settings.database_url, timeout=settings.store_timeout_seconds)
    store = DistrictStore(engine)
    try:
        store.create_tables()
        total = seed_states(store)
        logger.info("✅ Seed complete: %d records", total)
        log_summary(seed_summary(store))
        return total
    except SQLAlchemyError:
        logger.exception("DB error during seed")
        raise
    finally:
        engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    run_seed_once()
