import uuid
from datetime import time
from decimal import Decimal

from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import OperationalError, ProgrammingError

from app.db.session import SessionLocal
from app.core.config import settings
from app.models.service import Service
from app.models.setting import Setting
from app.models.weekly_availability import WeeklyAvailability
from app.services.settings_service import MAX_PER_DAY_KEY, MAX_PER_SLOT_KEY

# 0=Sun..6=Sat. Weekdays: morning + afternoon windows; weekend closed.
DEFAULT_WEEK = {
    0: (False, []),
    1: (True, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))]),
    2: (True, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))]),
    3: (True, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))]),
    4: (True, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))]),
    5: (True, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))]),
    6: (False, []),
}

DEFAULT_SERVICES = [
    ("General repair visit", Decimal("89.00"), Decimal("20.00")),
    ("Plumbing", Decimal("120.00"), Decimal("30.00")),
]


def ensure_setting(db: Session, key: str, value: int):
    if db.get(Setting, key):
        return
    db.add(Setting(key=key, int_value=value, str_value=None))


def ensure_week(db: Session):
    for dow, (active, windows) in DEFAULT_WEEK.items():
        if db.query(WeeklyAvailability).filter(WeeklyAvailability.day_of_week == dow).first():
            continue
        padded = list(windows) + [(None, None)] * (3 - len(windows))
        db.add(
            WeeklyAvailability(
                id=str(uuid.uuid4()),
                day_of_week=dow,
                is_active=active,
                time_slot_1_start=padded[0][0], time_slot_1_end=padded[0][1],
                time_slot_2_start=padded[1][0], time_slot_2_end=padded[1][1],
                time_slot_3_start=padded[2][0], time_slot_3_end=padded[2][1],
            )
        )


def run(db=None):
    if db is None:
        db = SessionLocal()
    try:
        # If migrations haven't been applied yet, seeding must not crash the API.
        try:
            db.execute(text("SELECT 1 FROM weekly_availability LIMIT 1"))
        except (ProgrammingError, OperationalError):
            db.rollback()
            print("[seed] weekly_availability table not found yet. Skipping seeding (run alembic upgrade head).")
            return

        ensure_setting(db, MAX_PER_SLOT_KEY, settings.DEFAULT_MAX_BOOKINGS_PER_SLOT)
        ensure_setting(db, MAX_PER_DAY_KEY, settings.DEFAULT_MAX_BOOKINGS_PER_DAY)
        ensure_week(db)

        if not db.query(Service).first():
            for name, base, deposit in DEFAULT_SERVICES:
                db.add(Service(id=str(uuid.uuid4()), name=name, base_price=base, reservation_price=deposit, is_active=True))
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    run()
