"""
Final price for a service at a (possibly absent) zone.

Precedence, highest first:
  1. active service/zone override  -> total = custom_price
  2. zone pricing_type == "fixed"  -> total = base_price + fixed_price
  3. zone pricing_type == "percentage" -> total = base_price * multiplier
  4. no zone                       -> total = base_price
adjustment is always total - base_price and may be negative.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy.orm import Session

from app.models.service import Service
from app.models.service_zone_price import ServiceZonePrice
from app.schemas.pricing import PriceBreakdown, ServiceSpec, ZonePriceOverride
from app.schemas.zone import ZoneSpec
from app.services.errors import ConfigurationInvalid

CENTS = Decimal("0.01")

PRICING_PERCENTAGE = "percentage"
PRICING_FIXED = "fixed"


def _money(v) -> Decimal:
    return Decimal(str(v)).quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_zone_pricing(zone: ZoneSpec) -> None:
    if zone.pricing_type == PRICING_PERCENTAGE:
        if zone.multiplier is None:
            raise ConfigurationInvalid(zone.id, "percentage pricing without multiplier")
        if zone.multiplier < 0:
            raise ConfigurationInvalid(zone.id, "negative multiplier")
    elif zone.pricing_type == PRICING_FIXED:
        if zone.fixed_price is None:
            raise ConfigurationInvalid(zone.id, "fixed pricing without fixed_price")
    else:
        raise ConfigurationInvalid(zone.id, f"unknown pricing_type {zone.pricing_type!r}")


def resolve_price(
    service: ServiceSpec,
    zone: Optional[ZoneSpec],
    override: Optional[ZonePriceOverride] = None,
) -> PriceBreakdown:
    base = _money(service.base_price)
    deposit = _money(service.reservation_price) if service.reservation_price is not None else None

    if (
        zone is not None
        and override is not None
        and override.is_active
        and override.service_id == service.id
        and override.zone_id == zone.id
    ):
        total = _money(override.custom_price)
        source = "override"
    elif zone is not None:
        validate_zone_pricing(zone)
        if zone.pricing_type == PRICING_FIXED:
            total = _money(base + Decimal(zone.fixed_price))
            source = PRICING_FIXED
        else:
            total = _money(base * Decimal(zone.multiplier))
            source = PRICING_PERCENTAGE
    else:
        total = base
        source = "base"

    return PriceBreakdown(
        base=base,
        adjustment=total - base,
        total=total,
        source=source,
        reservation_price=deposit,
    )


def get_service_spec(db: Session, service_id: str) -> Optional[ServiceSpec]:
    s = db.get(Service, service_id)
    if not s or not s.is_active:
        return None
    return ServiceSpec(
        id=s.id,
        name=s.name,
        base_price=s.base_price,
        reservation_price=s.reservation_price,
    )


def get_zone_override(db: Session, service_id: str, zone_id: str) -> Optional[ZonePriceOverride]:
    row = (
        db.query(ServiceZonePrice)
        .filter(
            ServiceZonePrice.service_id == service_id,
            ServiceZonePrice.zone_id == zone_id,
            ServiceZonePrice.is_active == True,  # noqa: E712
        )
        .first()
    )
    if not row:
        return None
    return ZonePriceOverride(
        service_id=row.service_id,
        zone_id=row.zone_id,
        custom_price=row.custom_price,
        is_active=row.is_active,
    )
