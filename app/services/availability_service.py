"""
Expand the recurring weekly template into concrete bookable windows.

Day-of-week convention: 0 = Sunday, 1 = Monday, ..., 6 = Saturday.
Python's date.weekday() is Monday-first; use sunday_first_weekday().
"""
import calendar
from datetime import date, time
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.non_working_day import NonWorkingDay
from app.models.weekly_availability import WeeklyAvailability
from app.schemas.availability import (
    CapacitySettings,
    DayAvailabilityOut,
    MonthAvailabilityOut,
    SlotOut,
    SlotUsage,
    TimeWindow,
    WeeklyTemplate,
)
from app.services.capacity_service import capacity_rejection, load_slot_usage
from app.services.settings_service import get_capacity_settings


def sunday_first_weekday(d: date) -> int:
    return (d.weekday() + 1) % 7


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def windows_for_date(
    d: date,
    templates_by_day: Dict[int, WeeklyTemplate],
    non_working_days: Iterable[date] = (),
) -> List[TimeWindow]:
    if d in non_working_days:
        return []
    tpl = templates_by_day.get(sunday_first_weekday(d))
    if tpl is None or not tpl.is_active:
        return []
    windows = [
        TimeWindow(date=d, start=start, end=end)
        for start, end in tpl.windows
        if start is not None and end is not None
    ]
    # Stable: equal starts keep template order. Overlaps are passed through.
    windows.sort(key=lambda w: w.start)
    return windows


def expand_month(
    year: int,
    month: int,
    templates: Iterable[WeeklyTemplate],
    non_working_days: Iterable[date] = (),
) -> Dict[date, List[TimeWindow]]:
    """Every date of the month mapped to its windows (empty list when closed)."""
    by_day = {t.day_of_week: t for t in templates}
    closed = frozenset(non_working_days)
    first, last = month_bounds(year, month)
    return {
        date(year, month, day): windows_for_date(date(year, month, day), by_day, closed)
        for day in range(first.day, last.day + 1)
    }


def find_window(windows: Iterable[TimeWindow], start: time) -> Optional[TimeWindow]:
    for w in windows:
        if w.start == start:
            return w
    return None


def template_from_row(row: WeeklyAvailability) -> WeeklyTemplate:
    return WeeklyTemplate(
        day_of_week=row.day_of_week,
        is_active=bool(row.is_active),
        windows=(
            (row.time_slot_1_start, row.time_slot_1_end),
            (row.time_slot_2_start, row.time_slot_2_end),
            (row.time_slot_3_start, row.time_slot_3_end),
        ),
    )


def load_weekly_templates(db: Session) -> List[WeeklyTemplate]:
    rows = db.query(WeeklyAvailability).order_by(WeeklyAvailability.day_of_week.asc()).all()
    return [template_from_row(r) for r in rows]


def load_non_working_days(db: Session, start: date, end: date) -> set[date]:
    rows = (
        db.query(NonWorkingDay.day)
        .filter(
            NonWorkingDay.is_active == True,  # noqa: E712
            NonWorkingDay.day >= start,
            NonWorkingDay.day <= end,
        )
        .all()
    )
    return {r[0] for r in rows}


def expand_month_from_store(db: Session, year: int, month: int) -> Dict[date, List[TimeWindow]]:
    first, last = month_bounds(year, month)
    return expand_month(year, month, load_weekly_templates(db), load_non_working_days(db, first, last))


def build_month_availability(
    year: int,
    month: int,
    expanded: Dict[date, List[TimeWindow]],
    non_working_days: Iterable[date],
    usage: Iterable[SlotUsage],
    capacity: CapacitySettings,
    today: date,
) -> MonthAvailabilityOut:
    """Calendar view: expanded windows annotated with booked counts and availability."""
    closed = set(non_working_days)
    slot_counts: Dict[tuple, int] = {}
    day_counts: Dict[date, int] = {}
    for u in usage:
        slot_counts[(u.date, u.slot_start)] = slot_counts.get((u.date, u.slot_start), 0) + u.count
        day_counts[u.date] = day_counts.get(u.date, 0) + u.count

    days: List[DayAvailabilityOut] = []
    for d in sorted(expanded):
        is_past = d < today
        booked_day = day_counts.get(d, 0)
        slots = []
        for w in expanded[d]:
            booked = slot_counts.get((d, w.start), 0)
            slots.append(
                SlotOut(
                    slotId=w.slot_id,
                    start=w.start.strftime("%H:%M"),
                    end=w.end.strftime("%H:%M"),
                    booked=booked,
                    available=not is_past and capacity_rejection(booked, booked_day, capacity) is None,
                )
            )
        days.append(
            DayAvailabilityOut(
                date=d.isoformat(),
                isNonWorkingDay=d in closed,
                isPast=is_past,
                booked=booked_day,
                dayFull=booked_day >= capacity.max_per_day,
                slots=slots,
            )
        )
    return MonthAvailabilityOut(
        year=year,
        month=month,
        maxPerSlot=capacity.max_per_slot,
        maxPerDay=capacity.max_per_day,
        days=days,
    )


def month_availability(db: Session, year: int, month: int, today: date) -> MonthAvailabilityOut:
    first, last = month_bounds(year, month)
    closed = load_non_working_days(db, first, last)
    expanded = expand_month(year, month, load_weekly_templates(db), closed)
    return build_month_availability(
        year,
        month,
        expanded,
        closed,
        load_slot_usage(db, first, last),
        get_capacity_settings(db),
        today,
    )
