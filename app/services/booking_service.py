"""
Booking orchestration: slot offered -> under capacity -> priced -> committed.

The only serialised section is the final re-check + insert, guarded by an
in-process lock per scheduled date and a FOR UPDATE lock on that date's
booking_day_locks row. Everything before it is read-only.
"""
import logging
import threading
import uuid
from datetime import date, datetime
from typing import Dict, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.booking import Booking, BookingDayLock
from app.schemas.booking import BookingRequest
from app.schemas.pricing import PriceBreakdown, ServiceSpec
from app.schemas.zone import ZoneSpec
from app.services.availability_service import expand_month_from_store, find_window
from app.services.booking_history_service import log_booking_event
from app.services.capacity_service import check_slot, load_slot_usage
from app.services.errors import BookingRejected, ConfigurationInvalid, RejectionReason
from app.services.pricing_service import get_service_spec, get_zone_override, resolve_price
from app.services.settings_service import get_capacity_settings
from app.services.zone_resolver import load_active_zones, matching_zones

logger = logging.getLogger(__name__)

PENDING = "pending"

STORE_ERRORS = (OperationalError, InterfaceError, PoolTimeoutError)

_day_locks: Dict[date, threading.Lock] = {}
_day_locks_guard = threading.Lock()


def _lock_for(day: date) -> threading.Lock:
    with _day_locks_guard:
        lock = _day_locks.get(day)
        if lock is None:
            lock = _day_locks[day] = threading.Lock()
        return lock


def today_in_booking_tz() -> date:
    return datetime.now(ZoneInfo(settings.BOOKING_TIMEZONE)).date()


def price_for_point(
    db: Session,
    service: ServiceSpec,
    point: Optional[Tuple[float, float]],
    zones: Optional[Sequence[ZoneSpec]] = None,
) -> Tuple[Optional[ZoneSpec], PriceBreakdown]:
    """Zone + price for a point. Never fails for geographic reasons; worst case is base pricing."""
    if point is not None:
        if zones is None:
            zones = load_active_zones(db)
        for zone in matching_zones(point, zones):
            override = get_zone_override(db, service.id, zone.id)
            try:
                return zone, resolve_price(service, zone, override)
            except ConfigurationInvalid as e:
                logger.warning("Skipping zone %s for pricing: %s", zone.id, e.reason)
    return None, resolve_price(service, None)


def _validate_slot(db: Session, request: BookingRequest, today: date) -> None:
    d = request.scheduled_date
    if d < today:
        raise BookingRejected(RejectionReason.SLOT_NOT_OFFERED, "date is in the past")
    windows = expand_month_from_store(db, d.year, d.month).get(d, [])
    if find_window(windows, request.scheduled_time) is None:
        raise BookingRejected(
            RejectionReason.SLOT_NOT_OFFERED,
            f"no slot at {request.scheduled_time.strftime('%H:%M')} on {d.isoformat()}",
        )


def _check_capacity(db: Session, request: BookingRequest) -> None:
    d = request.scheduled_date
    reason = check_slot(d, request.scheduled_time, load_slot_usage(db, d, d), get_capacity_settings(db))
    if reason is not None:
        raise BookingRejected(reason, f"{d.isoformat()} {request.scheduled_time.strftime('%H:%M')}")


def _lock_day_row(db: Session, day: date) -> None:
    stmt = select(BookingDayLock).where(BookingDayLock.day == day).with_for_update()
    if db.execute(stmt).scalar_one_or_none() is not None:
        return
    db.add(BookingDayLock(day=day))
    try:
        db.flush()
    except IntegrityError:
        # Another request created the row first; wait for its lock instead
        db.rollback()
        db.execute(stmt).scalar_one()


def _commit_booking(
    db: Session,
    request: BookingRequest,
    zone: Optional[ZoneSpec],
    price: PriceBreakdown,
) -> Booking:
    d = request.scheduled_date
    with _lock_for(d):
        _lock_day_row(db, d)
        reason = check_slot(d, request.scheduled_time, load_slot_usage(db, d, d), get_capacity_settings(db))
        if reason is not None:
            # Lost the race after the first check passed
            raise BookingRejected(reason, "capacity reached while committing")

        booking = Booking(
            id=str(uuid.uuid4()),
            service_id=request.service_id,
            zone_id=zone.id if zone else None,
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            address=request.address,
            latitude=request.lat,
            longitude=request.lng,
            scheduled_date=d,
            scheduled_time=request.scheduled_time,
            total_amount=price.total,
            reservation_price=price.reservation_price,
            booking_status=PENDING,
            payment_status="pending",
            payment_method=request.payment_method,
            notes=request.notes,
        )
        db.add(booking)
        log_booking_event(
            db,
            booking.id,
            "created",
            details={
                "total": price.total,
                "adjustment": price.adjustment,
                "source": price.source,
                "zone_id": booking.zone_id,
            },
        )
        db.commit()
    db.refresh(booking)
    return booking


def attempt_booking(db: Session, request: BookingRequest, today: Optional[date] = None) -> Booking:
    """
    Validate, price and atomically commit a booking in "pending" status.

    Raises BookingRejected (no write performed) with one of SERVICE_NOT_FOUND,
    SLOT_NOT_OFFERED, SLOT_FULL, DAY_FULL or STORE_UNAVAILABLE.
    """
    today = today or today_in_booking_tz()
    try:
        service = get_service_spec(db, request.service_id)
        if service is None:
            raise BookingRejected(RejectionReason.SERVICE_NOT_FOUND, request.service_id)
        _validate_slot(db, request, today)
        _check_capacity(db, request)
        zone, price = price_for_point(db, service, request.point)
        booking = _commit_booking(db, request, zone, price)
    except BookingRejected as e:
        db.rollback()
        logger.info("Booking rejected: %s", e)
        raise
    except STORE_ERRORS as e:
        db.rollback()
        logger.error("Store unavailable while booking %s: %s", request.service_id, e)
        raise BookingRejected(RejectionReason.STORE_UNAVAILABLE, "store unavailable") from e

    logger.info(
        "Booking %s committed for %s %s total=%s zone=%s",
        booking.id, booking.scheduled_date, booking.scheduled_time, booking.total_amount, booking.zone_id,
    )
    return booking


def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
    return db.get(Booking, booking_id)
