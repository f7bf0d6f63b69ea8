# backend/app/services/aggregation.py
"""
Pure aggregation over DistrictRecord lists. No I/O; callers decide where the
records come from (store or fallback).
"""
from app.utils import format_inr, round_half_up

PERFORMING_WELL_DAYS = 50

OVERVIEW_SUM_FIELDS = (
    "total_job_cards",
    "total_workers",
    "active_workers",
    "total_expenditure",
    "total_works",
    "completed_works",
    "women_workers",
)


def _mean(values):
    values = list(values)
    return sum(values) / len(values) if values else 0


def _percent(numerator, denominator):
    if not denominator:
        return None
    return round_half_up(numerator / denominator * 100, 1)


def state_overview(records):
    """State-level sums; avg_days is the mean of average_days_per_household (0 for no records)."""
    overview = {"total_districts": len(records)}
    for name in OVERVIEW_SUM_FIELDS:
        overview[name] = sum(getattr(r, name) for r in records)
    overview["avg_days"] = _mean(r.average_days_per_household for r in records)
    return overview


def top_performers(records, n=5):
    # sorted() is stable, so equal scores keep their input order
    ranked = sorted(records, key=lambda r: r.average_days_per_household, reverse=True)
    return [
        {
            "district_name": r.district_name,
            "average_days_per_household": r.average_days_per_household,
            "active_workers": r.active_workers,
        }
        for r in ranked[:n]
    ]


def state_average(records):
    if not records:
        return None
    return {
        "avg_job_cards": _mean(r.total_job_cards for r in records),
        "avg_workers": _mean(r.total_workers for r in records),
        "avg_days": _mean(r.average_days_per_household for r in records),
        "avg_expenditure": _mean(r.total_expenditure for r in records),
    }


def district_vs_state(current, average):
    """Percent of the state average for job cards, workers and days; None where the average is 0 or missing."""
    average = average or {}
    return {
        "job_cards_vs_state": _percent(current.total_job_cards, average.get("avg_job_cards")),
        "workers_vs_state": _percent(current.total_workers, average.get("avg_workers")),
        "days_vs_state": _percent(current.average_days_per_household, average.get("avg_days")),
    }


def employment_rate(record):
    return _percent(record.active_workers, record.total_workers) or 0.0


def completion_rate(record):
    return _percent(record.completed_works, record.total_works) or 0.0


def district_summary(record):
    """Simplified figures for low-literacy readers."""
    return {
        "district_name": record.district_name,
        "metrics": {
            "total_families": record.total_job_cards,
            "total_workers": record.total_workers,
            "people_working": record.active_workers,
            "days_of_work": round_half_up(record.average_days_per_household),
            "money_spent": format_inr(record.total_expenditure),
            "projects_completed": record.completed_works,
            "projects_ongoing": record.ongoing_works,
            "women_workers": record.women_workers,
        },
        "indicators": {
            "is_performing_well": record.average_days_per_household >= PERFORMING_WELL_DAYS,
            "employment_rate": employment_rate(record),
            "completion_rate": completion_rate(record),
        },
        "last_updated": record.last_updated.isoformat() if record.last_updated else None,
    }
