"""
Treatment window arithmetic.

An assignment's window opens on its start date and closes
``number_of_days`` calendar days later.  Remaining days are counted from
"today" to the closing date, so a treatment that has not started yet
reports the days until it starts plus its full duration.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from django.utils import timezone

DateLike = Union[date, datetime]

URGENCY_CRITICAL_DAYS = 3
URGENCY_WARNING_DAYS = 7

WINDOW_TOO_LATE = 'Treatment window would end after the last representable date.'


def _as_date(value: DateLike) -> date:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    return value


def remaining_days(start_date: DateLike, number_of_days: int, today: Optional[DateLike] = None) -> int:
    """Days until the treatment window closes, never below zero.

    ``today`` defaults to the current local date.  Time-of-day on either
    date is ignored.
    """
    today_d = _as_date(today) if today is not None else timezone.localdate()
    # Whole-day offsets only: start + number_of_days may lie past date.max.
    return max(0, (_as_date(start_date) - today_d).days + number_of_days)


def window_fits_calendar(start_date: DateLike, number_of_days: int) -> bool:
    """True when the closing date of the window is still a representable date."""
    return (date.max - _as_date(start_date)).days >= number_of_days


def treatment_urgency(days_left: int) -> str:
    if days_left <= 0:
        return 'finished'
    if days_left <= URGENCY_CRITICAL_DAYS:
        return 'critical'
    if days_left <= URGENCY_WARNING_DAYS:
        return 'warning'
    return 'ok'
