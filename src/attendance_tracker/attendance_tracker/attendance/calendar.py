"""Working-day arithmetic.

Monday to Friday count as working days. Public holidays are not modelled, so
absence counts on a holiday are overstated.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterator

from ..common.datetime_utils import month_key, parse_month


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month."""
    year, mon = parse_month(month)
    last_day = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def is_working_day(day: date) -> bool:
    return day.weekday() < 5


def working_days_in_month(month: str) -> int:
    start, end = month_bounds(month)
    return sum(1 for d in iter_days(start, end) if is_working_day(d))


def working_days_to_date(month: str, today: date) -> int:
    """Working days counted for absence inference.

    For the month containing `today`, only days up to and including today
    are counted. Any other month counts in full.
    """
    if month != month_key(today):
        return working_days_in_month(month)
    start, _ = month_bounds(month)
    return sum(1 for d in iter_days(start, today) if is_working_day(d))


def trailing_days(today: date, count: int) -> list[date]:
    """`count` days ending at today, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
