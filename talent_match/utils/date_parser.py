"""Date coercion and year arithmetic for experience scoring."""

from datetime import date, datetime, timezone
from typing import Iterable, Optional, Union

from talent_match.schemas.candidate import WorkExperience

DAYS_PER_YEAR = 365.0

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """Coerce a date, datetime or ISO-8601 string ("2024-01-12", "2024-01-12T09:00:00Z") to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text).date() if "T" in text else date.fromisoformat(text)


def today() -> date:
    return datetime.now(timezone.utc).date()


def years_between(start: DateLike, end: Optional[DateLike], now: Optional[DateLike] = None) -> float:
    """
    Years from start to end (or now when end is None).
    Ranges that end before they start count as zero.
    """
    start_d = to_date(start)
    if end is not None:
        end_d = to_date(end)
    else:
        end_d = to_date(now) if now is not None else today()
    days = (end_d - start_d).days
    return max(0.0, days / DAYS_PER_YEAR)


def total_experience_years(experience: Iterable[WorkExperience], now: Optional[DateLike] = None) -> float:
    """Sum of years across all experience entries; open-ended entries run until now."""
    return sum(years_between(e.start_date, e.end_date, now) for e in experience)
