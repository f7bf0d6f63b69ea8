# backend/app/services/fallback.py
"""
Deterministic sample data used when the persistent store is unreachable or empty.

generate() returns raw records shaped like the data.gov.in MGNREGA feed (string
figures, expenditure in lakh). transform() turns raw feed records, sample or
live, into validated DistrictRecord objects.
"""
import logging
import random
from datetime import date, datetime, timezone

from pydantic import ValidationError

from app.models.record import DistrictRecord
from app.services.reference import districts_for, normalize_name
from app.utils import safe_int, safe_float, financial_year_for, month_label, round_half_up

logger = logging.getLogger("fallback")

RUPEES_PER_LAKH = 100_000


def _sample_record(state, district, fin_year, month):
    # one generator per district-month keeps figures stable across calls
    rng = random.Random(f"{state}|{district}|{month}")

    households = rng.randint(20_000, 120_000)
    job_cards = households + rng.randint(10_000, 150_000)
    workers = rng.randint(int(job_cards * 1.4), int(job_cards * 2.2))
    active = rng.randint(int(workers * 0.35), int(workers * 0.7))
    women = int(active * rng.uniform(0.35, 0.6))
    persondays = households * rng.randint(20, 80)
    works = rng.randint(2_000, 15_000)
    completed = rng.randint(int(works * 0.3), int(works * 0.8))
    ongoing = rng.randint(0, works - completed)
    wage_rate = rng.uniform(230, 320)
    expenditure_lakh = persondays * wage_rate / RUPEES_PER_LAKH

    return {
        "state_name": state,
        "district_name": district,
        "fin_year": fin_year,
        "month": month,
        "Total_No_of_JobCards_issued": str(job_cards),
        "Total_No_of_Workers": str(workers),
        "Total_No_of_Active_Workers": str(active),
        "Women_Workers": str(women),
        "Total_Households_Worked": str(households),
        "Persondays_of_Central_Liability_so_far": str(persondays),
        "Total_Exp": f"{expenditure_lakh:.2f}",
        "Total_No_of_Works_Takenup": str(works),
        "Number_of_Completed_Works": str(completed),
        "Number_of_Ongoing_Works": str(ongoing),
    }


def generate(state_name, today=None):
    """Raw sample records, one per known district of the state, for the current month.

    Unsupported states yield an empty list.
    """
    state = normalize_name(state_name)
    districts = districts_for(state)
    if not districts:
        return []

    today = today or date.today()
    fin_year = financial_year_for(today)
    month = month_label(today)
    return [_sample_record(state, d, fin_year, month) for d in districts]


def transform(raw_records, data_source="sample", now=None):
    """Normalize raw feed records into DistrictRecord objects.

    Expenditure is converted from lakh to rupees and the average days of work
    per household is derived from persondays and households worked.
    """
    now = now or datetime.now(timezone.utc)
    records = []

    for rec in raw_records:
        households = safe_int(rec.get("Total_Households_Worked"))
        persondays = safe_int(rec.get("Persondays_of_Central_Liability_so_far"))
        total_works = safe_int(rec.get("Total_No_of_Works_Takenup"))
        completed = safe_int(rec.get("Number_of_Completed_Works"))
        ongoing = rec.get("Number_of_Ongoing_Works")
        ongoing = safe_int(ongoing) if ongoing not in (None, "") else max(total_works - completed, 0)

        try:
            records.append(DistrictRecord(
                state_name=rec.get("state_name") or "",
                district_name=rec.get("district_name") or "",
                financial_year=rec.get("fin_year") or "",
                month_year=rec.get("month") or "",
                total_job_cards=safe_int(rec.get("Total_No_of_JobCards_issued")),
                total_workers=safe_int(rec.get("Total_No_of_Workers")),
                active_workers=safe_int(rec.get("Total_No_of_Active_Workers")),
                women_workers=safe_int(rec.get("Women_Workers")),
                total_expenditure=round_half_up(safe_float(rec.get("Total_Exp")) * RUPEES_PER_LAKH, 2),
                total_works=total_works,
                completed_works=completed,
                ongoing_works=ongoing,
                average_days_per_household=round_half_up(persondays / households, 1) if households > 0 else 0.0,
                data_source=data_source,
                last_updated=now,
            ))
        except ValidationError:
            logger.warning("Skipping invalid raw record for %s/%s",
                           rec.get("state_name"), rec.get("district_name"), exc_info=True)

    return records


def sample_records(state_name, today=None):
    return transform(generate(state_name, today=today))
