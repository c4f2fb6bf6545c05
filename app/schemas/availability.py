from datetime import date, time
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class WeeklyTemplate(BaseModel):
    """One weekday of the recurring schedule. day_of_week: 0=Sun .. 6=Sat."""
    model_config = ConfigDict(frozen=True)

    day_of_week: int = Field(ge=0, le=6)
    is_active: bool = True
    windows: Tuple[Tuple[Optional[time], Optional[time]], ...] = Field(default=(), max_length=3)


class TimeWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    start: time
    end: time

    @property
    def slot_id(self) -> str:
        # Duration is informational: same date+start is the same bookable slot
        return f"{self.date.isoformat()}-{self.start.strftime('%H:%M:%S')}"


class CapacitySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_per_slot: int = Field(ge=1)
    max_per_day: int = Field(ge=1)


class SlotUsage(BaseModel):
    """Non-cancelled bookings already placed for a (date, slot start)."""
    model_config = ConfigDict(frozen=True)

    date: date
    slot_start: time
    count: int = Field(ge=0)


class SlotOut(BaseModel):
    slotId: str
    start: str
    end: str
    booked: int
    available: bool


class DayAvailabilityOut(BaseModel):
    date: str
    isNonWorkingDay: bool = False
    isPast: bool = False
    booked: int = 0
    dayFull: bool = False
    slots: List[SlotOut] = []


class MonthAvailabilityOut(BaseModel):
    year: int
    month: int
    maxPerSlot: int
    maxPerDay: int
    days: List[DayAvailabilityOut]
