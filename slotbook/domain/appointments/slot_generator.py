"""Recurring slot generation

Expands a monthly recurrence (month, weekdays, time range, interval) into the
concrete ``(date, time)`` pairs that bulk appointment creation persists.
"""

import calendar
from collections.abc import Iterable
from datetime import date
from typing import NamedTuple, Union

from ...shared.errors import ValidationError
from ...shared.validators import minutes_to_time, time_to_minutes, validate_time

MONTHS = {name.lower(): number for number, name in enumerate(calendar.month_name) if name}
WEEKDAYS = {name.lower(): number for number, name in enumerate(calendar.day_name)}


class Slot(NamedTuple):
    date: str  # YYYY-MM-DD
    time: str  # HH:MM


def parse_month(month: Union[str, int]) -> int:
    """Month name (any case) or number -> 1..12"""
    if isinstance(month, int) and not isinstance(month, bool):
        if 1 <= month <= 12:
            return month
        raise ValidationError(f"Invalid month: {month}")

    if isinstance(month, str):
        key = month.strip().lower()
        if key in MONTHS:
            return MONTHS[key]
        if key.isdigit() and 1 <= int(key) <= 12:
            return int(key)

    raise ValidationError(f"Invalid month: {month}")


def parse_weekdays(weekdays: Iterable[str]) -> set[int]:
    """Weekday names -> set of ``date.weekday()`` numbers (Monday == 0)"""
    if isinstance(weekdays, str):
        weekdays = [weekdays]

    selected = set()
    for name in weekdays or []:
        key = str(name).strip().lower()
        if key not in WEEKDAYS:
            raise ValidationError(f"Invalid weekday: {name}")
        selected.add(WEEKDAYS[key])

    if not selected:
        raise ValidationError("Select at least one weekday")
    return selected


def generate_times(start_time: str, end_time: str, interval: int) -> list[str]:
    """
    Times from ``start_time`` stepping by ``interval`` minutes.

    Only slots that fit entirely before ``end_time`` are produced, so
    ``end_time`` itself never appears and a trailing partial slot is dropped.
    """
    validate_time(start_time)
    validate_time(end_time)

    if start_time >= end_time:
        raise ValidationError("Start time must be before end time")
    if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
        raise ValidationError("Interval must be a positive number of minutes")

    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    count = (end - start) // interval
    return [minutes_to_time(start + step * interval) for step in range(count)]


def generate_slots(
    month: Union[str, int],
    year: int,
    weekdays: Iterable[str],
    start_time: str,
    end_time: str,
    interval: int,
) -> list[Slot]:
    """
    Expand a monthly recurrence into ordered slots.

    Every day of ``month``/``year`` whose weekday is selected, in ascending
    order, crossed with every time of ``generate_times``.

    Raises:
        ValidationError: On an unknown month or weekday, a year that is not
            four digits, malformed times, ``start_time >= end_time`` or a
            non-positive interval
    """
    month_number = parse_month(month)
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise ValidationError(f"Invalid year: {year}")

    selected = parse_weekdays(weekdays)
    times = generate_times(start_time, end_time, interval)

    _, days_in_month = calendar.monthrange(year, month_number)

    slots = []
    for day in range(1, days_in_month + 1):
        current = date(year, month_number, day)
        if current.weekday() not in selected:
            continue
        iso_date = current.isoformat()
        slots.extend(Slot(iso_date, slot_time) for slot_time in times)

    return slots
