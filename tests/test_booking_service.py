import threading
import uuid
from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError, TimeoutError as PoolTimeoutError

from app.models.booking import Booking
from app.models.booking_history import BookingHistory
from app.schemas.booking import BookingRequest
from app.services import booking_service
from app.services.booking_service import attempt_booking
from app.services.capacity_service import load_slot_usage
from app.services.errors import BookingRejected, RejectionReason

from conftest import (
    DOWNTOWN_RING,
    TODAY,
    TUESDAY,
    add_circle_zone,
    add_non_working_day,
    add_override,
    add_polygon_zone,
    add_service,
    add_template,
    set_capacity,
)

T14 = time(14)
INSIDE = (40.0, -3.7)
OUTSIDE = (41.0, -3.7)


def request(service_id, day=TUESDAY, start=T14, point=INSIDE, **kw):
    lat, lng = point if point else (None, None)
    return BookingRequest(
        service_id=service_id,
        scheduled_date=day,
        scheduled_time=start,
        lat=lat,
        lng=lng,
        customer_name="Ana",
        customer_email="ana@example.com",
        **kw,
    )


def seed_bookings(db, n, day=TUESDAY, start=T14, status="pending"):
    for _ in range(n):
        db.add(Booking(
            id=str(uuid.uuid4()),
            service_id="other",
            scheduled_date=day,
            scheduled_time=start,
            total_amount=Decimal("1"),
            booking_status=status,
        ))
    db.commit()


def slot_usage(db, day=TUESDAY, start=T14):
    return sum(u.count for u in load_slot_usage(db, day, day) if u.slot_start == start)


def assert_rejected(db, req, reason, today=TODAY):
    before = db.query(Booking).count()
    with pytest.raises(BookingRejected) as exc:
        attempt_booking(db, req, today=today)
    assert exc.value.reason == reason
    assert db.query(Booking).count() == before


def test_end_to_end_fixed_zone_booking(db, tuesday_schedule):
    zone = add_circle_zone(db, 40.0, -3.7, 2000, pricing_type="fixed", fixed_price="15")
    db.commit()
    seed_bookings(db, 3)

    booking = attempt_booking(db, request(tuesday_schedule.id), today=TODAY)

    assert booking.total_amount == Decimal("104.00")
    assert booking.zone_id == zone.id
    assert booking.booking_status == "pending"
    assert booking.reservation_price == Decimal("20.00")
    assert slot_usage(db) == 4


def test_history_row_written_with_booking(db, tuesday_schedule):
    booking = attempt_booking(db, request(tuesday_schedule.id), today=TODAY)
    rows = db.query(BookingHistory).filter(BookingHistory.booking_id == booking.id).all()
    assert [r.status_change for r in rows] == ["created"]


def test_no_zone_is_base_price(db, tuesday_schedule):
    add_circle_zone(db, 40.0, -3.7, 2000, fixed_price="15")
    db.commit()
    outside = attempt_booking(db, request(tuesday_schedule.id, point=OUTSIDE), today=TODAY)
    no_point = attempt_booking(db, request(tuesday_schedule.id, point=None), today=TODAY)
    assert (outside.total_amount, outside.zone_id) == (Decimal("89.00"), None)
    assert (no_point.total_amount, no_point.zone_id) == (Decimal("89.00"), None)


def test_override_and_overlap_precedence(db, tuesday_schedule):
    add_circle_zone(db, 40.0, -3.7, 20000, pricing_type="percentage", multiplier="2.0", name="metro")
    downtown = add_polygon_zone(db, DOWNTOWN_RING, multiplier="1.2")
    add_override(db, tuesday_schedule.id, downtown.id, "99.00")
    db.commit()

    booking = attempt_booking(db, request(tuesday_schedule.id), today=TODAY)
    assert booking.zone_id == downtown.id
    assert booking.total_amount == Decimal("99.00")


def test_malformed_zone_does_not_block_booking(db, tuesday_schedule):
    add_polygon_zone(db, DOWNTOWN_RING, pricing_type="percentage", multiplier=None, priority=1)
    good = add_circle_zone(db, 40.0, -3.7, 5000, pricing_type="percentage", multiplier="1.5", priority=2)
    db.commit()

    booking = attempt_booking(db, request(tuesday_schedule.id), today=TODAY)
    assert booking.zone_id == good.id
    assert booking.total_amount == Decimal("133.50")


def test_slot_not_offered(db, tuesday_schedule):
    sid = tuesday_schedule.id
    assert_rejected(db, request(sid, start=time(13)), RejectionReason.SLOT_NOT_OFFERED)
    # Wednesday has no template row
    assert_rejected(db, request(sid, day=date(2030, 1, 9)), RejectionReason.SLOT_NOT_OFFERED)
    # past date
    assert_rejected(db, request(sid), RejectionReason.SLOT_NOT_OFFERED, today=date(2030, 1, 9))


def test_non_working_day_rejected(db, tuesday_schedule):
    add_non_working_day(db, TUESDAY)
    db.commit()
    assert_rejected(db, request(tuesday_schedule.id), RejectionReason.SLOT_NOT_OFFERED)


def test_slot_full_and_day_full(db, tuesday_schedule):
    seed_bookings(db, 5)
    assert_rejected(db, request(tuesday_schedule.id), RejectionReason.SLOT_FULL)

    # 09:00 still open per-slot (4 of 5), but the day holds 5 + 11 + 4 = 20
    seed_bookings(db, 11, status="confirmed")
    seed_bookings(db, 4, start=time(9))
    assert_rejected(db, request(tuesday_schedule.id, start=time(9)), RejectionReason.DAY_FULL)


def test_cancelled_bookings_free_capacity(db, tuesday_schedule):
    seed_bookings(db, 4)
    seed_bookings(db, 3, status="cancelled")
    booking = attempt_booking(db, request(tuesday_schedule.id), today=TODAY)
    assert booking.id
    assert slot_usage(db) == 5


def test_unknown_service_rejected(db, tuesday_schedule):
    assert_rejected(db, request("missing"), RejectionReason.SERVICE_NOT_FOUND)


@pytest.mark.parametrize(
    "error",
    [
        OperationalError("SELECT 1", {}, Exception("canceling statement due to statement timeout")),
        PoolTimeoutError("QueuePool limit reached"),
    ],
)
def test_store_errors_map_to_store_unavailable(db, tuesday_schedule, monkeypatch, error):
    def boom(*args, **kwargs):
        raise error

    monkeypatch.setattr(booking_service, "load_slot_usage", boom)
    assert_rejected(db, request(tuesday_schedule.id), RejectionReason.STORE_UNAVAILABLE)


def test_concurrent_attempts_commit_exactly_once(session_factory):
    setup = session_factory()
    add_template(setup, 2, [(time(9), time(12)), (T14, time(17))])
    set_capacity(setup, 1, 20)
    service = add_service(setup, "89.00")
    setup.commit()
    service_id = service.id
    setup.close()

    n = 8
    barrier = threading.Barrier(n)
    results = []
    results_lock = threading.Lock()

    def worker():
        s = session_factory()
        try:
            barrier.wait()
            try:
                b = attempt_booking(s, request(service_id), today=TODAY)
                outcome = ("ok", b.id)
            except BookingRejected as e:
                outcome = ("rejected", e.reason)
        finally:
            s.close()
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=worker) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    committed = [r for r in results if r[0] == "ok"]
    rejected = [r for r in results if r[0] == "rejected"]
    assert len(committed) == 1
    assert len(rejected) == n - 1
    assert all(reason == RejectionReason.SLOT_FULL for _, reason in rejected)

    check = session_factory()
    try:
        assert check.query(Booking).count() == 1
    finally:
        check.close()
