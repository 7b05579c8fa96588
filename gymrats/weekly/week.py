# -*- coding: utf-8 -*-
"""Monday-aligned week windows.

All values are naive local time: a week starts on Monday at midnight and the
window ``[week_start, week_end)`` spans exactly seven days.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple, Union

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def week_bounds(today: Optional[DateLike] = None) -> Tuple[datetime, datetime]:
    day = _as_date(today)
    start = datetime.combine(day - timedelta(days=day.weekday()), time.min)
    return start, start + timedelta(days=7)


def weekday_name(day: Optional[DateLike] = None) -> str:
    return WEEKDAYS[_as_date(day).weekday()]


def week_dates(week_start: DateLike) -> List[date]:
    """The seven calendar dates of the week starting at ``week_start``, Monday first."""
    first = _as_date(week_start)
    return [first + timedelta(days=offset) for offset in range(7)]

