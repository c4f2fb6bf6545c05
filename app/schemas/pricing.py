from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.zone import ZoneOut


class ServiceSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    base_price: Decimal
    reservation_price: Optional[Decimal] = None


class ZonePriceOverride(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_id: str
    zone_id: str
    custom_price: Decimal
    is_active: bool = True


class PriceBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    base: Decimal
    adjustment: Decimal
    total: Decimal
    source: str = "base"  # override|fixed|percentage|base
    reservation_price: Optional[Decimal] = None


class PriceQuoteIn(BaseModel):
    serviceId: str
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class PriceQuoteOut(BaseModel):
    serviceId: str
    zone: Optional[ZoneOut] = None
    base: Decimal
    adjustment: Decimal
    total: Decimal
    source: str
    reservationPrice: Optional[Decimal] = None
