# backend/app/models/district_data.py
from sqlalchemy import Column, Integer, String, DateTime, Float, Index, UniqueConstraint
from sqlalchemy.sql import func
from app.db.database import Base


class DistrictData(Base):
    __tablename__ = "district_data"
    id = Column(Integer, primary_key=True, index=True)
    state_name = Column(String(128), nullable=False, index=True)
    district_name = Column(String(128), nullable=False, index=True)
    financial_year = Column(String(32), nullable=False, index=True)
    month_year = Column(String(32), nullable=False, index=True)
    total_job_cards = Column(Integer, nullable=False, default=0)
    total_workers = Column(Integer, nullable=False, default=0)
    active_workers = Column(Integer, nullable=False, default=0)
    women_workers = Column(Integer, nullable=False, default=0)
    total_expenditure = Column(Float, nullable=False, default=0.0)
    total_works = Column(Integer, nullable=False, default=0)
    completed_works = Column(Integer, nullable=False, default=0)
    ongoing_works = Column(Integer, nullable=False, default=0)
    average_days_per_household = Column(Float, nullable=False, default=0.0)
    data_source = Column(String(16), nullable=False, default="live")
    last_updated = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint(
            "state_name", "district_name", "financial_year", "month_year",
            name="uq_district_month",
        ),
        Index("ix_state_year", "state_name", "financial_year"),
    )
