# backend/app/services/store.py
import logging

from sqlalchemy import func, text

from app.db.database import Base, build_session_factory
from app.models.district_data import DistrictData
from app.models.record import DistrictRecord, RECORD_KEY_FIELDS

logger = logging.getLogger("store")


def _to_record(row):
    return DistrictRecord.model_validate(row) if row is not None else None


class DistrictStore:
    """Read/upsert access to persisted district records.

    SQLAlchemy errors propagate; the orchestrator decides whether they mean
    the store is unavailable.
    """

    def __init__(self, engine, session_factory=None):
        self.engine = engine
        self.SessionLocal = session_factory or build_session_factory(engine)

    def create_tables(self):
        Base.metadata.create_all(bind=self.engine)

    def ping(self):
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def count(self):
        with self.SessionLocal() as session:
            return session.query(DistrictData).count()

    # ---------- LOOKUPS ----------
    def distinct_states(self):
        with self.SessionLocal() as session:
            rows = (
                session.query(DistrictData.state_name)
                .distinct()
                .order_by(DistrictData.state_name)
                .all()
            )
        return [r[0] for r in rows]

    def distinct_districts(self, state):
        with self.SessionLocal() as session:
            rows = (
                session.query(DistrictData.district_name)
                .filter(DistrictData.state_name == state)
                .distinct()
                .order_by(DistrictData.district_name)
                .all()
            )
        return [r[0] for r in rows]

    def find_current_record(self, state, district, year):
        """Latest month of the financial year for a district, or None."""
        with self.SessionLocal() as session:
            row = (
                session.query(DistrictData)
                .filter_by(state_name=state, district_name=district, financial_year=year)
                .order_by(
                    DistrictData.month_year.desc(),
                    DistrictData.updated_at.desc(),
                    DistrictData.id.desc(),
                )
                .first()
            )
            return _to_record(row)

    def find_recent_records(self, state, district, limit=6):
        with self.SessionLocal() as session:
            rows = (
                session.query(DistrictData)
                .filter_by(state_name=state, district_name=district)
                .order_by(DistrictData.month_year.desc(), DistrictData.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_record(r) for r in rows]

    # ---------- AGGREGATES ----------
    def aggregate_state_average(self, state, year):
        with self.SessionLocal() as session:
            count, job_cards, workers, days, expenditure = (
                session.query(
                    func.count(DistrictData.id),
                    func.avg(DistrictData.total_job_cards),
                    func.avg(DistrictData.total_workers),
                    func.avg(DistrictData.average_days_per_household),
                    func.avg(DistrictData.total_expenditure),
                )
                .filter_by(state_name=state, financial_year=year)
                .one()
            )
        if not count:
            return None
        return {
            "avg_job_cards": float(job_cards),
            "avg_workers": float(workers),
            "avg_days": float(days),
            "avg_expenditure": float(expenditure),
        }

    def aggregate_state_overview(self, state, year):
        """Same figures as aggregation.state_overview, computed in SQL; None when the state has no rows."""
        def total(column):
            return func.coalesce(func.sum(column), 0)

        with self.SessionLocal() as session:
            row = (
                session.query(
                    func.count(DistrictData.id),
                    total(DistrictData.total_job_cards),
                    total(DistrictData.total_workers),
                    total(DistrictData.active_workers),
                    total(DistrictData.total_expenditure),
                    total(DistrictData.total_works),
                    total(DistrictData.completed_works),
                    total(DistrictData.women_workers),
                    func.avg(DistrictData.average_days_per_household),
                )
                .filter_by(state_name=state, financial_year=year)
                .one()
            )
        if not row[0]:
            return None
        return {
            "total_districts": int(row[0]),
            "total_job_cards": int(row[1]),
            "total_workers": int(row[2]),
            "active_workers": int(row[3]),
            "total_expenditure": float(row[4]),
            "total_works": int(row[5]),
            "completed_works": int(row[6]),
            "women_workers": int(row[7]),
            "avg_days": float(row[8] or 0),
        }

    def top_districts_by_days(self, state, year, n=5):
        with self.SessionLocal() as session:
            rows = (
                session.query(
                    DistrictData.district_name,
                    DistrictData.average_days_per_household,
                    DistrictData.active_workers,
                )
                .filter_by(state_name=state, financial_year=year)
                .order_by(DistrictData.average_days_per_household.desc(), DistrictData.id.asc())
                .limit(n)
                .all()
            )
        return [
            {
                "district_name": name,
                "average_days_per_household": days,
                "active_workers": active,
            }
            for name, days, active in rows
        ]

    # ---------- WRITES ----------
    def _upsert(self, session, record):
        values = record.model_dump()
        existing = (
            session.query(DistrictData)
            .filter_by(**dict(zip(RECORD_KEY_FIELDS, record.key)))
            .one_or_none()
        )
        if existing is None:
            session.add(DistrictData(**values))
        else:
            for name, value in values.items():
                setattr(existing, name, value)
        session.flush()

    def upsert_record(self, record):
        self.upsert_records([record])

    def upsert_records(self, records):
        """Insert or overwrite by (state, district, financial year, month) in one transaction."""
        with self.SessionLocal() as session:
            try:
                for record in records:
                    self._upsert(session, record)
                session.commit()
            except Exception:
                session.rollback()
                logger.exception("Upsert failed, rolled back %d records", len(records))
                raise
        logger.debug("Upserted %d records", len(records))
        return len(records)
