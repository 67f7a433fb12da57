import calendar
from datetime import date

import pytest

from slotbook.domain.appointments.slot_generator import (
    generate_slots,
    generate_times,
    parse_month,
    parse_weekdays,
)
from slotbook.shared.errors import ValidationError


def count_weekdays(year, month, weekday_numbers):
    _, days = calendar.monthrange(year, month)
    return sum(1 for d in range(1, days + 1) if date(year, month, d).weekday() in weekday_numbers)


def test_monday_wednesday_october_2025():
    slots = generate_slots("October", 2025, ["Monday", "Wednesday"], "09:00", "10:00", 30)

    # 4 Mondays + 5 Wednesdays, two slots each
    assert len(slots) == 18
    assert {s.time for s in slots} == {"09:00", "09:30"}
    assert slots[0] == ("2025-10-01", "09:00")
    assert slots[1] == ("2025-10-01", "09:30")
    assert slots[-1] == ("2025-10-29", "09:30")


@pytest.mark.parametrize(
    "month,year,weekdays,start,end,interval",
    [
        ("January", 2024, ["Tuesday"], "08:00", "12:00", 15),
        ("february", 2024, ["Thursday", "Friday"], "13:00", "17:30", 60),
        ("February", 2023, ["Saturday", "Sunday"], "10:00", "10:45", 30),
        ("December", 2025, list(calendar.day_name), "00:00", "23:59", 45),
        (7, 2026, ["Wednesday"], "09:10", "09:55", 7),
    ],
)
def test_slot_count_and_weekdays(month, year, weekdays, start, end, interval):
    slots = generate_slots(month, year, weekdays, start, end, interval)

    month_number = parse_month(month)
    selected = parse_weekdays(weekdays)
    start_minutes = int(start[:2]) * 60 + int(start[3:])
    end_minutes = int(end[:2]) * 60 + int(end[3:])
    per_day = (end_minutes - start_minutes) // interval

    assert len(slots) == count_weekdays(year, month_number, selected) * per_day
    for slot in slots:
        assert date.fromisoformat(slot.date).weekday() in selected


def test_times_never_reach_end_and_start_first_each_day():
    slots = generate_slots("March", 2025, ["Monday"], "09:00", "11:00", 40)

    by_day = {}
    for slot in slots:
        by_day.setdefault(slot.date, []).append(slot.time)

    for times in by_day.values():
        assert times[0] == "09:00"
        assert all(t < "11:00" for t in times)
        assert times == ["09:00", "09:40", "10:20"]


def test_slot_exactly_at_end_is_not_produced():
    assert generate_times("09:00", "10:00", 30) == ["09:00", "09:30"]
    assert generate_times("09:00", "10:00", 60) == ["09:00"]


def test_partial_trailing_slot_is_dropped():
    assert generate_times("09:00", "10:50", 30) == ["09:00", "09:30", "10:00"]
    assert generate_times("09:00", "09:20", 60) == []


def test_leap_year_february_includes_the_29th():
    leap = generate_slots("February", 2024, ["Thursday"], "09:00", "09:30", 30)
    non_leap = generate_slots("February", 2023, ["Tuesday"], "09:00", "09:30", 30)

    assert "2024-02-29" in {s.date for s in leap}
    assert max(s.date for s in non_leap) <= "2023-02-28"


def test_dates_are_ascending():
    slots = generate_slots("May", 2025, ["Friday", "Monday"], "09:00", "10:00", 60)
    dates = [s.date for s in slots]
    assert dates == sorted(dates)


def test_names_are_case_insensitive():
    assert generate_slots("OCTOBER", 2025, ["monday"], "09:00", "09:30", 30) == generate_slots(
        "October", 2025, ["Monday"], "09:00", "09:30", 30
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start_time": "10:00", "end_time": "10:00"},
        {"start_time": "11:00", "end_time": "10:00"},
        {"start_time": "9:00"},
        {"end_time": "24:00"},
        {"weekdays": []},
        {"weekdays": ["Funday"]},
        {"month": "Smarch"},
        {"month": 13},
        {"year": 25},
        {"interval": 0},
        {"interval": -15},
    ],
)
def test_invalid_recurrence_raises_validation_error(kwargs):
    params = {
        "month": "October",
        "year": 2025,
        "weekdays": ["Monday"],
        "start_time": "09:00",
        "end_time": "10:00",
        "interval": 30,
    }
    params.update(kwargs)

    with pytest.raises(ValidationError):
        generate_slots(**params)
