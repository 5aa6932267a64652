import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

RANGE_TOKENS = ("all", "month", "3months", "6months", "year")


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window. A ``None`` bound is open."""
    start: Optional[date] = None
    end: Optional[date] = None


def today() -> date:
    return date.today()


def utcnow() -> datetime:
    """Timezone-aware current UTC time, used for row timestamps."""
    return datetime.now(timezone.utc)


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    max_day = calendar.monthrange(year, month)[1]
    return min(day, max_day)


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


def resolve_range(token: str, reference: date = None) -> Optional[DateRange]:
    """Map an analysis range token to a concrete window ending at ``reference``.

    ``month`` starts on the first of the current calendar month; ``3months``,
    ``6months`` and ``year`` are rolling lookbacks to the same day N months
    back (``year`` is 12 months, i.e. 365 or 366 days). ``all`` returns
    ``None``. Unknown tokens raise ``ValueError``.
    """
    reference = reference or today()
    if token == "all":
        return None
    if token == "month":
        return DateRange(reference.replace(day=1), reference)
    if token == "3months":
        return DateRange(add_months(reference, -3), reference)
    if token == "6months":
        return DateRange(add_months(reference, -6), reference)
    if token == "year":
        return DateRange(add_months(reference, -12), reference)
    raise ValueError(f"Unknown range: {token!r}")
