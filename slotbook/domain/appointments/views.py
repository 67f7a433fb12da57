"""
Appointment list derivations

Pure functions behind the "my appointments" screens: which appointments a
viewer sees, how they split into bulk batches and individual slots, the label
for a batch, and page slicing for long lists.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel

from ...config import MAX_VISIBLE_PAGES
from ...shared.errors import ValidationError


class AppointmentGroups(BaseModel):
    """Appointments split by batch id"""

    batches: dict[str, list[Any]]
    individual: list[Any]


class Page(BaseModel):
    """One page of a list"""

    items: list[Any]
    page: int
    page_size: int
    total_pages: int
    total_items: int
    start_index: int  # 0-based, inclusive
    end_index: int  # 0-based, exclusive


def visible_appointments(appointments: list, viewer) -> list:
    """
    Appointments relevant to ``viewer``.

    Members see the slots they booked (matched on member name), specialists
    see every slot they published.
    """
    if viewer.user_type == "specialist":
        return [a for a in appointments if a.specialist_id == viewer.id]
    return [a for a in appointments if a.is_booked and a.member_name == viewer.name]


def group_appointments(appointments: list, viewer) -> AppointmentGroups:
    """
    Split the viewer's appointments into batch groups and individual slots.

    Batches keep first-seen order. A batch in which the viewer has nothing
    visible does not appear at all.
    """
    batches: dict[str, list] = {}
    individual = []

    for appointment in visible_appointments(appointments, viewer):
        if appointment.batch_id:
            batches.setdefault(appointment.batch_id, []).append(appointment)
        else:
            individual.append(appointment)

    return AppointmentGroups(batches=batches, individual=individual)


def _format_range(values: list[str]) -> str:
    distinct = sorted(set(values))
    if len(distinct) == 1:
        return distinct[0]
    return f"{distinct[0]} – {distinct[-1]}"


def format_batch_title(group: list) -> str:
    """Human label for a batch, e.g. ``Math Tutor · 18 slots · 2025-10-01 – 2025-10-29 · 09:00 – 09:30``"""
    if not group:
        raise ValidationError("Cannot format a title for an empty batch")

    count = len(group)
    noun = "slot" if count == 1 else "slots"
    date_range = _format_range([a.date for a in group])
    time_range = _format_range([a.time for a in group])
    return f"{group[0].specialization} · {count} {noun} · {date_range} · {time_range}"


def paginate(items: list, page: int, page_size: int) -> Page:
    """
    Slice out the 1-indexed ``page``.

    Out-of-range pages clamp to the first or last page instead of failing.
    """
    if page_size < 1:
        raise ValidationError("Page size must be at least 1")

    total_items = len(items)
    total_pages = max(1, math.ceil(total_items / page_size))
    page = min(max(page, 1), total_pages)

    start_index = (page - 1) * page_size
    end_index = min(start_index + page_size, total_items)

    return Page(
        items=items[start_index:end_index],
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        total_items=total_items,
        start_index=start_index,
        end_index=end_index,
    )


def page_window(current_page: int, total_pages: int, max_visible: Optional[int] = None) -> list[int]:
    """Page numbers to show as buttons, centred on ``current_page`` where possible"""
    if max_visible is None:
        max_visible = MAX_VISIBLE_PAGES
    if max_visible < 1:
        raise ValidationError("max_visible must be at least 1")
    total_pages = max(1, total_pages)
    current_page = min(max(current_page, 1), total_pages)

    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    start_page = max(1, current_page - max_visible // 2)
    end_page = min(total_pages, start_page + max_visible - 1)
    if end_page - start_page < max_visible - 1:
        start_page = max(1, end_page - max_visible + 1)

    return list(range(start_page, end_page + 1))
