import uuid
from datetime import date, time
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.db.session import build_engine, get_db
from app.main import app
from app.models.non_working_day import NonWorkingDay
from app.models.service import Service
from app.models.service_zone_price import ServiceZonePrice
from app.models.setting import Setting
from app.models.weekly_availability import WeeklyAvailability
from app.models.zone import Zone
from app.services.settings_service import MAX_PER_DAY_KEY, MAX_PER_SLOT_KEY

# 2030-01-08 is a Tuesday (day_of_week 2, Sunday-first)
TUESDAY = date(2030, 1, 8)
TODAY = date(2030, 1, 1)

# Downtown box around (40.0, -3.7)
DOWNTOWN_RING = [[-3.71, 39.99], [-3.69, 39.99], [-3.69, 40.01], [-3.71, 40.01]]


@pytest.fixture()
def session_factory(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def client(session_factory):
    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def add_template(db, day_of_week, windows, is_active=True):
    padded = list(windows) + [(None, None)] * (3 - len(windows))
    db.add(
        WeeklyAvailability(
            id=str(uuid.uuid4()),
            day_of_week=day_of_week,
            is_active=is_active,
            time_slot_1_start=padded[0][0], time_slot_1_end=padded[0][1],
            time_slot_2_start=padded[1][0], time_slot_2_end=padded[1][1],
            time_slot_3_start=padded[2][0], time_slot_3_end=padded[2][1],
        )
    )


def add_service(db, base_price="89.00", reservation_price=None, is_active=True):
    s = Service(
        id=str(uuid.uuid4()),
        name="Repair visit",
        base_price=Decimal(base_price),
        reservation_price=Decimal(reservation_price) if reservation_price else None,
        is_active=is_active,
    )
    db.add(s)
    return s


def add_circle_zone(db, lat, lng, radius, pricing_type="fixed", fixed_price=None, multiplier=None, priority=None, name="circle"):
    z = Zone(
        id=str(uuid.uuid4()),
        name=name,
        zone_type="circle",
        center_lat=lat,
        center_lng=lng,
        radius_meters=radius,
        pricing_type=pricing_type,
        fixed_price=Decimal(fixed_price) if fixed_price is not None else None,
        multiplier=Decimal(multiplier) if multiplier is not None else None,
        priority=priority,
        is_active=True,
    )
    db.add(z)
    return z


def add_polygon_zone(db, ring, pricing_type="percentage", multiplier="1.2", fixed_price=None, priority=None, name="polygon"):
    z = Zone(
        id=str(uuid.uuid4()),
        name=name,
        zone_type="polygon",
        coordinates=ring,
        pricing_type=pricing_type,
        multiplier=Decimal(multiplier) if multiplier is not None else None,
        fixed_price=Decimal(fixed_price) if fixed_price is not None else None,
        priority=priority,
        is_active=True,
    )
    db.add(z)
    return z


def add_override(db, service_id, zone_id, custom_price, is_active=True):
    db.add(
        ServiceZonePrice(
            id=str(uuid.uuid4()),
            service_id=service_id,
            zone_id=zone_id,
            custom_price=Decimal(custom_price),
            is_active=is_active,
        )
    )


def add_non_working_day(db, day, reason="holiday"):
    db.add(NonWorkingDay(id=str(uuid.uuid4()), day=day, reason=reason, is_active=True))


def set_capacity(db, per_slot, per_day):
    db.add(Setting(key=MAX_PER_SLOT_KEY, int_value=per_slot))
    db.add(Setting(key=MAX_PER_DAY_KEY, int_value=per_day))


@pytest.fixture()
def tuesday_schedule(db):
    """Tuesday template 09:00-12:00 and 14:00-17:00, capacity 5/20, one $89 service."""
    add_template(db, 2, [(time(9, 0), time(12, 0)), (time(14, 0), time(17, 0))])
    set_capacity(db, 5, 20)
    service = add_service(db, "89.00", "20.00")
    db.commit()
    return service
