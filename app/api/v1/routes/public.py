from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.schemas.availability import MonthAvailabilityOut
from app.schemas.pricing import PriceQuoteIn, PriceQuoteOut
from app.schemas.zone import ZoneOut, ZoneResolveOut
from app.services.availability_service import month_availability
from app.services.booking_service import price_for_point, today_in_booking_tz
from app.services.pricing_service import get_service_spec
from app.services.zone_resolver import load_active_zones, resolve_zone

router = APIRouter(tags=["public"])


@router.get("/public/availability", response_model=MonthAvailabilityOut)
def get_month_availability(
    year: int = Query(ge=2000, le=2100),
    month: int = Query(ge=1, le=12),
    today: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """Bookable windows for every date of the month with booked counts. Re-fetch on every navigation."""
    return month_availability(db, year, month, today or today_in_booking_tz())


@router.get("/public/zones/resolve", response_model=ZoneResolveOut)
def resolve_zone_for_point(
    lat: float = Query(ge=-90, le=90),
    lng: float = Query(ge=-180, le=180),
    db: Session = Depends(get_db),
):
    """Zone containing the point, or null (base pricing, still serviceable)."""
    zone = resolve_zone((lat, lng), load_active_zones(db))
    return ZoneResolveOut(zone=ZoneOut.from_spec(zone) if zone else None)


@router.post("/public/price-quote", response_model=PriceQuoteOut)
def price_quote(body: PriceQuoteIn, db: Session = Depends(get_db)):
    service = get_service_spec(db, body.serviceId)
    if service is None:
        raise HTTPException(status_code=404, detail="Service not found")
    zone, price = price_for_point(db, service, (body.lat, body.lng))
    return PriceQuoteOut(
        serviceId=service.id,
        zone=ZoneOut.from_spec(zone) if zone else None,
        base=price.base,
        adjustment=price.adjustment,
        total=price.total,
        source=price.source,
        reservationPrice=price.reservation_price,
    )
