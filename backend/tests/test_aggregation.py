import pytest

from app.services import aggregation
from app.utils import financial_year_for, format_inr, round_half_up, safe_int, safe_float

from conftest import fixed_sample, make_record

FIELDS = (
    "total_job_cards",
    "total_workers",
    "active_workers",
    "total_expenditure",
    "total_works",
    "completed_works",
    "women_workers",
)


class TestStateOverview:
    def test_sums_and_mean_over_fallback_records(self):
        records = fixed_sample("MAHARASHTRA")
        overview = aggregation.state_overview(records)

        assert overview["total_districts"] == len(records)
        for name in FIELDS:
            assert overview[name] == sum(getattr(r, name) for r in records)
        expected_days = sum(r.average_days_per_household for r in records) / len(records)
        assert overview["avg_days"] == pytest.approx(expected_days)

    def test_no_records_is_all_zero(self):
        overview = aggregation.state_overview([])
        assert overview == {name: 0 for name in ("total_districts", "avg_days") + FIELDS}


class TestTopPerformers:
    def test_stable_descending_order(self):
        records = [
            make_record("A", days=10),
            make_record("B", days=30),
            make_record("C", days=30),
            make_record("D", days=5),
        ]
        names = [r["district_name"] for r in aggregation.top_performers(records)]
        assert names == ["B", "C", "A", "D"]

    def test_limited_to_n(self):
        records = [make_record(f"D{i}", days=i) for i in range(10)]
        top = aggregation.top_performers(records, n=3)
        assert [r["district_name"] for r in top] == ["D9", "D8", "D7"]
        assert set(top[0]) == {"district_name", "average_days_per_household", "active_workers"}

    def test_empty(self):
        assert aggregation.top_performers([]) == []


class TestComparison:
    def test_ratio_to_state_average(self):
        current = make_record("X", days=50, total_job_cards=50, total_workers=30)
        average = {"avg_job_cards": 25, "avg_workers": 40, "avg_days": 25}
        assert aggregation.district_vs_state(current, average) == {
            "job_cards_vs_state": 200.0,
            "workers_vs_state": 75.0,
            "days_vs_state": 200.0,
        }

    def test_zero_or_missing_denominator_is_none(self):
        current = make_record("X", days=50)
        result = aggregation.district_vs_state(current, {"avg_job_cards": 0, "avg_workers": 10})
        assert result["job_cards_vs_state"] is None
        assert result["days_vs_state"] is None
        assert result["workers_vs_state"] == 20000.0

    def test_no_average_at_all(self):
        result = aggregation.district_vs_state(make_record("X"), None)
        assert set(result.values()) == {None}

    def test_state_average(self):
        records = [make_record("A", days=20, total_workers=100), make_record("B", days=40, total_workers=300)]
        avg = aggregation.state_average(records)
        assert avg["avg_days"] == 30
        assert avg["avg_workers"] == 200
        assert aggregation.state_average([]) is None


class TestRates:
    def test_employment_rate(self):
        assert aggregation.employment_rate(make_record("X", active_workers=1, total_workers=3)) == 33.3

    def test_employment_rate_without_workers(self):
        assert aggregation.employment_rate(make_record("X", active_workers=0, total_workers=0)) == 0.0

    def test_completion_rate(self):
        assert aggregation.completion_rate(make_record("X", completed_works=2, total_works=3)) == 66.7

    def test_rate_ties_round_up(self):
        assert aggregation.employment_rate(make_record("X", active_workers=49, total_workers=400)) == 12.3
        assert aggregation.completion_rate(make_record("X", completed_works=1, total_works=8)) == 12.5
        assert aggregation.completion_rate(make_record("X", completed_works=3, total_works=16)) == 18.8

    def test_completion_rate_without_works(self):
        record = make_record("X", completed_works=0, total_works=0, ongoing_works=0)
        assert aggregation.completion_rate(record) == 0


class TestDistrictSummary:
    def test_simplified_figures(self):
        record = make_record("SURAT", days=52.6, total_expenditure=12345678.4)
        summary = aggregation.district_summary(record)

        assert summary["district_name"] == "SURAT"
        assert summary["metrics"]["total_families"] == 1000
        assert summary["metrics"]["days_of_work"] == 53
        assert summary["metrics"]["money_spent"] == "₹1,23,45,678"
        assert summary["metrics"]["projects_ongoing"] == 30
        assert summary["indicators"] == {
            "is_performing_well": True,
            "employment_rate": 50.0,
            "completion_rate": 60.0,
        }
        assert summary["last_updated"]

    def test_half_days_round_up(self):
        assert aggregation.district_summary(make_record("X", days=46.5))["metrics"]["days_of_work"] == 47
        assert aggregation.district_summary(make_record("X", days=45.5))["metrics"]["days_of_work"] == 46

    def test_below_threshold_is_not_performing_well(self):
        summary = aggregation.district_summary(make_record("X", days=49.9))
        assert summary["indicators"]["is_performing_well"] is False


class TestUtils:
    @pytest.mark.parametrize("amount,expected", [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (100000, "₹1,00,000"),
        (12345678, "₹1,23,45,678"),
        ("2,500.6", "₹2,501"),
        (-150000, "-₹1,50,000"),
        (2.5, "₹3"),
        (3.5, "₹4"),
    ])
    def test_format_inr(self, amount, expected):
        assert format_inr(amount) == expected

    @pytest.mark.parametrize("value,places,expected", [
        (2.5, 0, 3),
        (0.5, 0, 1),
        (12.25, 1, 12.3),
        (12.35, 1, 12.4),
        (200.0, 1, 200.0),
        (-2.5, 0, -3),
    ])
    def test_round_half_up(self, value, places, expected):
        assert round_half_up(value, places) == expected

    def test_financial_year_boundaries(self):
        from datetime import date
        assert financial_year_for(date(2026, 3, 31)) == "2025-2026"
        assert financial_year_for(date(2026, 4, 1)) == "2026-2027"

    def test_safe_numbers(self):
        assert safe_int("1,234") == 1234
        assert safe_int("12.9") == 12
        assert safe_int("n/a") == 0
        assert safe_float(None) == 0.0
