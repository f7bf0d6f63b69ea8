from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RECORD_KEY_FIELDS = ("state_name", "district_name", "financial_year", "month_year")


class DistrictRecord(BaseModel):
    """One district-month snapshot of programme statistics.

    Identity is (state_name, district_name, financial_year, month_year).
    Derived fields are computed once at the ingestion boundary and never
    recalculated downstream.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    state_name: str = Field(min_length=1)
    district_name: str = Field(min_length=1)
    financial_year: str
    month_year: str

    total_job_cards: int = Field(default=0, ge=0)
    total_workers: int = Field(default=0, ge=0)
    active_workers: int = Field(default=0, ge=0)
    women_workers: int = Field(default=0, ge=0)

    total_expenditure: float = Field(default=0.0, ge=0)

    total_works: int = Field(default=0, ge=0)
    completed_works: int = Field(default=0, ge=0)
    ongoing_works: int = Field(default=0, ge=0)

    average_days_per_household: float = Field(default=0.0, ge=0)

    data_source: Literal["live", "sample"] = "live"
    last_updated: Optional[datetime] = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("state_name", "district_name", mode="before")
    @classmethod
    def _upper(cls, v):
        # runs before min_length, so whitespace-only names are rejected
        return v.strip().upper() if isinstance(v, str) else v

    @property
    def key(self):
        return tuple(getattr(self, f) for f in RECORD_KEY_FIELDS)

    def as_payload(self):
        return self.model_dump(mode="json")
