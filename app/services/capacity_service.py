from datetime import date, time
from typing import Iterable, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.booking import Booking
from app.schemas.availability import CapacitySettings, SlotUsage
from app.services.errors import RejectionReason

CANCELLED = "cancelled"


def slot_count(day: date, slot_start: time, usage: Iterable[SlotUsage]) -> int:
    return sum(u.count for u in usage if u.date == day and u.slot_start == slot_start)


def day_count(day: date, usage: Iterable[SlotUsage]) -> int:
    return sum(u.count for u in usage if u.date == day)


def capacity_rejection(
    slot_booked: int, day_booked: int, capacity: CapacitySettings
) -> Optional[RejectionReason]:
    """None when one more booking fits; limits are strict (count < max)."""
    if slot_booked >= capacity.max_per_slot:
        return RejectionReason.SLOT_FULL
    if day_booked >= capacity.max_per_day:
        return RejectionReason.DAY_FULL
    return None


def check_slot(
    day: date, slot_start: time, usage: Iterable[SlotUsage], capacity: CapacitySettings
) -> Optional[RejectionReason]:
    usage = list(usage)
    return capacity_rejection(slot_count(day, slot_start, usage), day_count(day, usage), capacity)


def is_slot_available(
    day: date, slot_start: time, usage: Iterable[SlotUsage], capacity: CapacitySettings
) -> bool:
    return check_slot(day, slot_start, usage, capacity) is None


def load_slot_usage(db: Session, start: date, end: date) -> list[SlotUsage]:
    """Non-cancelled booking counts grouped by (date, slot start) for start..end inclusive."""
    rows = (
        db.query(Booking.scheduled_date, Booking.scheduled_time, func.count(Booking.id))
        .filter(
            Booking.scheduled_date >= start,
            Booking.scheduled_date <= end,
            Booking.booking_status != CANCELLED,
        )
        .group_by(Booking.scheduled_date, Booking.scheduled_time)
        .all()
    )
    return [SlotUsage(date=d, slot_start=t, count=c) for d, t, c in rows]
