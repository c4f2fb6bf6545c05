from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.setting import Setting
from app.schemas.availability import CapacitySettings

MAX_PER_SLOT_KEY = "max_bookings_per_time_slot"
MAX_PER_DAY_KEY = "max_bookings_per_day"


def _get_int(db: Session, key: str, default: int) -> int:
    s = db.get(Setting, key)
    if s and s.int_value:
        return int(s.int_value)
    return default


def _set_int(db: Session, key: str, value: int) -> None:
    s = db.get(Setting, key)
    if not s:
        db.add(Setting(key=key, int_value=int(value), str_value=None))
    else:
        s.int_value = int(value)


def get_capacity_settings(db: Session) -> CapacitySettings:
    return CapacitySettings(
        max_per_slot=_get_int(db, MAX_PER_SLOT_KEY, settings.DEFAULT_MAX_BOOKINGS_PER_SLOT),
        max_per_day=_get_int(db, MAX_PER_DAY_KEY, settings.DEFAULT_MAX_BOOKINGS_PER_DAY),
    )


def set_capacity_settings(db: Session, max_per_slot: int, max_per_day: int) -> CapacitySettings:
    if max_per_slot < 1 or max_per_day < 1:
        raise ValueError("capacity limits must be >= 1")
    _set_int(db, MAX_PER_SLOT_KEY, max_per_slot)
    _set_int(db, MAX_PER_DAY_KEY, max_per_day)
    db.commit()
    return CapacitySettings(max_per_slot=max_per_slot, max_per_day=max_per_day)
