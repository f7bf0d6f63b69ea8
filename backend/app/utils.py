from datetime import date
from decimal import Decimal, ROUND_HALF_UP


def safe_float(v):
    try:
        if v is None:
            return 0.0
        if isinstance(v, str):
            v = v.replace(",", "").strip()
        return float(v)
    except (TypeError, ValueError):
        return 0.0


def safe_int(v):
    try:
        if v is None:
            return 0
        if isinstance(v, str):
            v = v.replace(",", "").strip()
        return int(float(v))
    except (TypeError, ValueError):
        return 0


def round_half_up(value, places=0):
    """Round ties away from zero (2.5 -> 3, 12.25 -> 12.3) instead of to the even neighbour."""
    exponent = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)


def financial_year_for(day: date) -> str:
    """Indian financial year label, April to March: 2026-10-18 -> "2026-2027"."""
    start = day.year if day.month >= 4 else day.year - 1
    return f"{start}-{start + 1}"


def month_label(day: date) -> str:
    return day.strftime("%Y-%m")


def format_inr(amount) -> str:
    """Format rupees with Indian digit grouping and no decimals: 12345678 -> "₹1,23,45,678"."""
    value = round_half_up(safe_float(amount))
    sign = "-" if value < 0 else ""
    digits = str(abs(value))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"
